from types import SimpleNamespace

import pytest

from flownodes.geometry import FontMetrics, NodeGeometry, Point, Rect
from flownodes.model import EmbeddedWidget, NodeDataModel, NodeValidationState
from flownodes.ports import INVALID, NodeDataType, PortType
from flownodes.styles import StyleCollection


class StubModel(NodeDataModel):
    def __init__(
        self,
        n_in=0,
        n_out=0,
        caption="caption",
        caption_visible=True,
        widget=None,
        validation=NodeValidationState.VALID,
        message="",
        port_captions=False,
    ):
        super().__init__()
        self._n = {PortType.IN: n_in, PortType.OUT: n_out}
        self._caption = caption
        self._caption_visible = caption_visible
        self._widget = widget
        self._validation = validation
        self._message = message
        self._port_captions = port_captions

    def caption(self):
        return self._caption

    def caption_visible(self):
        return self._caption_visible

    def name(self):
        return "stub"

    def n_ports(self, port_type):
        return self._n.get(port_type, 0)

    def data_type(self, port_type, port_index):
        return NodeDataType("t", "type")

    def port_caption(self, port_type, port_index):
        return "a much longer caption"

    def port_caption_visible(self, port_type, port_index):
        return self._port_captions

    def set_in_data(self, node_data, port_index):
        pass

    def out_data(self, port_index):
        return None

    def embedded_widget(self):
        return self._widget

    def validation_state(self):
        return self._validation

    def validation_message(self):
        return self._message


def diameter():
    return StyleCollection.node_style().connection_point_diameter


def test_point_arithmetic():
    p = Point(1, 2) + Point(3, 4)
    assert p == Point(4, 6)
    assert p - Point(4, 6) == Point(0, 0)
    assert p / 2 == Point(2, 3)
    assert Point(0, 0).distance_to(Point(3, 4)) == 5


def test_rect_contains_border_and_rejects_outside():
    r = Rect(0, 0, 10, 10)
    assert r.contains(Point(0, 0))
    assert r.contains(Point(10, 10))
    assert not r.contains(Point(10.5, 5))
    assert r.center == Point(5, 5)


def test_font_metrics_bounding_rect():
    fm = FontMetrics()
    assert fm.bounding_rect("") == Rect()
    rect = fm.bounding_rect("abc")
    assert rect.width == fm.width("abc")
    assert rect.height == fm.height()
    assert fm.bolded().width("abc") > fm.width("abc")


def test_initial_values_from_source():
    geom = NodeGeometry(StubModel())
    assert geom.width == 100
    assert geom.height == 150
    assert geom.spacing == 20
    assert geom.dragging_pos == Point(-1000, -1000)
    assert geom.hovered is False


def test_port_counts_follow_model():
    geom = NodeGeometry(StubModel(n_in=2, n_out=3))
    assert geom.n_sinks() == 2
    assert geom.n_sources() == 3


def test_recalculate_without_ports_or_caption():
    geom = NodeGeometry(StubModel(caption_visible=False))
    geom.recalculate_size()
    assert geom.height == 0
    assert geom.width == 2 * geom.spacing
    assert geom.caption_height() == 0


def test_each_port_row_adds_one_step():
    one = NodeGeometry(StubModel(n_in=1, n_out=1))
    three = NodeGeometry(StubModel(n_in=3, n_out=1))
    one.recalculate_size()
    three.recalculate_size()
    step = one.entry_height + one.spacing
    assert three.height - one.height == 2 * step


def test_caption_width_can_dominate():
    geom = NodeGeometry(StubModel(caption="x" * 40))
    geom.recalculate_size()
    assert geom.width == geom.caption_width()


def test_port_width_uses_caption_when_visible():
    plain = NodeGeometry(StubModel(n_in=1))
    captioned = NodeGeometry(StubModel(n_in=1, port_captions=True))
    fm = FontMetrics()
    assert plain.port_width(PortType.IN) == fm.width("type")
    assert captioned.port_width(PortType.IN) == fm.width("a much longer caption")
    assert plain.port_width(PortType.OUT) == 0


def test_validation_message_enlarges_node():
    valid = NodeGeometry(StubModel(n_in=1))
    warning = NodeGeometry(
        StubModel(n_in=1, validation=NodeValidationState.WARNING, message="warn")
    )
    valid.recalculate_size()
    warning.recalculate_size()
    assert warning.height == valid.height + warning.validation_height() + warning.spacing


def test_recalculate_with_same_font_is_noop():
    geom = NodeGeometry(StubModel(n_in=1))
    geom.width = 12345
    geom.recalculate_size(FontMetrics())
    assert geom.width == 12345


def test_recalculate_with_new_font_updates():
    geom = NodeGeometry(StubModel(n_in=1))
    geom.recalculate_size(FontMetrics(char_width=10, line_height=30))
    assert geom.entry_height == 30


def test_port_positions_by_side():
    geom = NodeGeometry(StubModel(n_in=2, n_out=2))
    geom.recalculate_size()
    in0 = geom.port_scene_position(0, PortType.IN)
    in1 = geom.port_scene_position(1, PortType.IN)
    out0 = geom.port_scene_position(0, PortType.OUT)
    assert in0.x == -diameter()
    assert out0.x == geom.width + diameter()
    assert in1.y - in0.y == geom.entry_height + geom.spacing
    assert geom.port_scene_position(0, PortType.NONE) == Point()


def test_port_position_offset():
    geom = NodeGeometry(StubModel(n_in=1))
    base = geom.port_scene_position(0, PortType.IN)
    shifted = geom.port_scene_position(0, PortType.IN, Point(50, 60))
    assert shifted - base == Point(50, 60)


def test_check_hit_scene_point():
    geom = NodeGeometry(StubModel(n_in=2, n_out=1))
    geom.recalculate_size()
    offset = Point(10, 10)
    target = geom.port_scene_position(1, PortType.IN, offset)
    assert geom.check_hit_scene_point(PortType.IN, target, offset) == 1
    assert geom.check_hit_scene_point(PortType.IN, Point(5000, 5000), offset) == INVALID
    assert geom.check_hit_scene_point(PortType.NONE, target, offset) == INVALID


def test_resize_rect_in_bottom_right_corner():
    geom = NodeGeometry(StubModel(n_in=1))
    geom.recalculate_size()
    rect = geom.resize_rect()
    assert rect.contains(Point(geom.width, geom.height))
    assert not rect.contains(Point(0, 0))


def test_bounding_rect_has_margin():
    geom = NodeGeometry(StubModel())
    rect = geom.bounding_rect()
    addon = 4 * diameter()
    assert rect.x == -addon
    assert rect.width == geom.width + 2 * addon


def test_widget_position_without_widget():
    assert NodeGeometry(StubModel()).widget_position() == Point()


def test_widget_position_expanding_sits_under_caption():
    widget = EmbeddedWidget(width=30, height=40, expanding=True)
    geom = NodeGeometry(StubModel(n_in=1, widget=widget))
    geom.recalculate_size()
    pos = geom.widget_position()
    assert pos.y == geom.caption_height()
    assert pos.x == geom.spacing + geom.port_width(PortType.IN)


def test_widget_is_centred_vertically():
    widget = EmbeddedWidget(width=30, height=40)
    geom = NodeGeometry(StubModel(n_in=1, widget=widget))
    geom.recalculate_size()
    pos = geom.widget_position()
    assert pos.y * 2 == geom.caption_height() + geom.height - widget.height


def test_equivalent_widget_height():
    geom = NodeGeometry(StubModel(n_in=1))
    geom.recalculate_size()
    assert geom.equivalent_widget_height() == geom.height - geom.caption_height()
    warn = NodeGeometry(
        StubModel(n_in=1, validation=NodeValidationState.ERROR, message="bad")
    )
    warn.recalculate_size()
    assert warn.equivalent_widget_height() == (
        warn.height - warn.caption_height() + warn.validation_height()
    )


def test_position_between_ports_is_symmetric():
    geom_a = NodeGeometry(StubModel(n_out=1))
    geom_b = NodeGeometry(StubModel(n_in=1))
    new_geom = NodeGeometry(StubModel())
    source = SimpleNamespace(position=Point(0, 0), geometry=geom_a)
    target = SimpleNamespace(position=Point(300, 100), geometry=geom_b)
    new = SimpleNamespace(position=Point(), geometry=new_geom)
    pos = NodeGeometry.calculate_node_position_between_node_ports(
        0, PortType.IN, target, 0, PortType.OUT, source, new
    )
    a = source.position + geom_a.port_scene_position(0, PortType.OUT)
    b = target.position + geom_b.port_scene_position(0, PortType.IN)
    centre = pos + Point(new_geom.width / 2.0, new_geom.height / 2.0)
    assert centre.distance_to(a) == pytest.approx(centre.distance_to(b))