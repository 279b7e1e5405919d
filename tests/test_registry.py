from flownodes.model import NodeDataModel
from flownodes.ports import NodeDataType
from flownodes.registry import DataModelRegistry


class StubNodeDataModel(NodeDataModel):
    def __init__(self, name="name", caption="caption"):
        super().__init__()
        self._name = name
        self._caption = caption

    def name(self):
        return self._name

    def caption(self):
        return self._caption

    def n_ports(self, port_type):
        return 0

    def data_type(self, port_type, port_index):
        return NodeDataType()

    def set_in_data(self, node_data, port_index):
        pass

    def out_data(self, port_index):
        return None


class StubModelStaticName(StubNodeDataModel):
    @staticmethod
    def static_name():
        return "Name"


def test_register_stub_model():
    registry = DataModelRegistry()
    registry.register_model(StubNodeDataModel)
    model = registry.create("name")
    assert model.name() == "name"


def test_register_stub_model_with_static_name():
    registry = DataModelRegistry()
    registry.register_model(StubModelStaticName)
    model = registry.create("Name")
    assert model.name() == "name"
    assert registry.create("name") is None


def test_create_unknown_returns_none():
    assert DataModelRegistry().create("missing") is None


def test_first_registration_wins():
    registry = DataModelRegistry()
    registry.register_model(lambda: StubNodeDataModel(caption="first"), "A")
    registry.register_model(lambda: StubNodeDataModel(caption="second"), "B")
    assert registry.create("name").caption() == "first"
    assert registry.categories() == ["A"]
    assert dict(registry.registered_models_category_association()) == {"name": "A"}


def test_default_category_and_sorted_categories():
    registry = DataModelRegistry()
    registry.register_model(lambda: StubNodeDataModel("b"), "Zeta")
    registry.register_model(lambda: StubNodeDataModel("a"))
    assert registry.categories() == ["Nodes", "Zeta"]
    assert set(registry.registered_model_creators()) == {"a", "b"}


def test_each_create_builds_a_new_model():
    registry = DataModelRegistry()
    registry.register_model(StubNodeDataModel)
    first = registry.create("name")
    second = registry.create("name")
    assert first.name() == "name"
    assert second.name() == "name"
    assert first is not second


def test_type_converter_lookup_matches_ids_and_direction():
    registry = DataModelRegistry()
    decimal = NodeDataType("decimal", "Decimal")
    integer = NodeDataType("integer", "Integer")

    def converter(data):
        return data

    registry.register_type_converter(decimal, integer, converter)
    assert registry.get_type_converter(NodeDataType("decimal", "other"), integer) is converter
    assert registry.get_type_converter(integer, decimal) is None