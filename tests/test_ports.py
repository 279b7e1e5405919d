from flownodes.ports import (
    INVALID,
    NodeData,
    NodeDataType,
    Port,
    PortType,
    opposite_port,
)


class _Data(NodeData):
    def __init__(self, type_id, name="n"):
        self._type = NodeDataType(type_id, name)

    def data_type(self):
        return self._type


def test_opposite_port_swaps_sides():
    assert opposite_port(PortType.IN) is PortType.OUT
    assert opposite_port(PortType.OUT) is PortType.IN


def test_opposite_of_none_is_none():
    assert opposite_port(PortType.NONE) is PortType.NONE


def test_opposite_port_is_an_involution_for_real_sides():
    for side in (PortType.IN, PortType.OUT):
        assert opposite_port(opposite_port(side)) is side


def test_default_port_is_invalid():
    port = Port()
    assert port.index == INVALID
    assert port.index_is_valid() is False
    assert port.port_type_is_valid() is False


def test_explicit_port_is_valid():
    port = Port(PortType.OUT, 2)
    assert port.index_is_valid() is True
    assert port.port_type_is_valid() is True


def test_node_data_type_equality_and_defaults():
    assert NodeDataType("decimal", "Decimal") == NodeDataType("decimal", "Decimal")
    assert NodeDataType() == NodeDataType("", "")


def test_same_type_compares_ids_only():
    assert NodeData.same_type(_Data("decimal", "Decimal"), _Data("decimal", "Other")) is True
    assert NodeData.same_type(_Data("decimal"), _Data("integer")) is False