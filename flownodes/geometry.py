"""Points, rectangles, text metrics and the layout of a node's surface."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Optional

from flownodes.model import NodeValidationState
from flownodes.ports import INVALID, PortIndex, PortType
from flownodes.styles import StyleCollection

if TYPE_CHECKING:
    from flownodes.model import NodeDataModel


@dataclass(frozen=True)
class Point:
    """A 2D point or offset."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def __truediv__(self, divisor: float) -> "Point":
        return Point(self.x / divisor, self.y / divisor)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2.0, self.y + self.height / 2.0)

    def contains(self, point: Point) -> bool:
        """True if ``point`` lies inside or on the border."""
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom


@dataclass(frozen=True)
class FontMetrics:
    """Fixed-pitch text measurements; bold text is one unit wider per character."""

    char_width: int = 7
    line_height: int = 16
    bold: bool = False

    def width(self, text: str) -> int:
        return len(text) * (self.char_width + (1 if self.bold else 0))

    def height(self) -> int:
        return self.line_height

    def bounding_rect(self, text: str) -> Rect:
        """Box around ``text``; empty text has an empty box."""
        if not text:
            return Rect()
        return Rect(0, 0, self.width(text), self.line_height)

    def bolded(self) -> "FontMetrics":
        return replace(self, bold=True)


class NodeGeometry:
    """Sizes and positions of a node's caption, ports, widget and messages."""

    def __init__(self, model: "NodeDataModel") -> None:
        self.width = 100
        self.height = 150
        self.entry_width = 0
        self.input_port_width = 70
        self.output_port_width = 70
        self.entry_height = 20
        self.spacing = 20
        self.hovered = False
        self.dragging_pos = Point(-1000, -1000)
        self._model = model
        self._n_sources = model.n_ports(PortType.OUT)
        self._n_sinks = model.n_ports(PortType.IN)
        self._font_metrics = FontMetrics()
        self._bold_font_metrics = self._font_metrics.bolded()

    def n_sources(self) -> int:
        return self._model.n_ports(PortType.OUT)

    def n_sinks(self) -> int:
        return self._model.n_ports(PortType.IN)

    def entry_bounding_rect(self) -> Rect:
        return Rect(0, 0, self.entry_width, self.entry_height)

    def bounding_rect(self) -> Rect:
        addon = 4 * StyleCollection.node_style().connection_point_diameter
        return Rect(-addon, -addon, self.width + 2 * addon, self.height + 2 * addon)

    def recalculate_size(self, font_metrics: Optional[FontMetrics] = None) -> None:
        """Recompute the size; with ``font_metrics``, only if the font changed."""
        if font_metrics is not None:
            bold = font_metrics.bolded()
            if bold == self._bold_font_metrics:
                return
            self._font_metrics = font_metrics
            self._bold_font_metrics = bold

        self.entry_height = self._font_metrics.height()
        step = self.entry_height + self.spacing
        self.height = step * max(self._n_sinks, self._n_sources)

        widget = self._model.embedded_widget()
        if widget is not None:
            self.height = max(self.height, widget.height)

        self.height += self.caption_height()

        self.input_port_width = self.port_width(PortType.IN)
        self.output_port_width = self.port_width(PortType.OUT)

        self.width = self.input_port_width + self.output_port_width + 2 * self.spacing
        if widget is not None:
            self.width += widget.width
        self.width = max(self.width, self.caption_width())

        if self._model.validation_state() is not NodeValidationState.VALID:
            self.width = max(self.width, self.validation_width())
            self.height += self.validation_height() + self.spacing

    def port_scene_position(
        self, index: PortIndex, port_type: PortType, offset: Optional[Point] = None
    ) -> Point:
        """Centre of a port, in node coordinates shifted by ``offset``."""
        diameter = StyleCollection.node_style().connection_point_diameter
        step = self.entry_height + self.spacing
        total_height = self.caption_height() + step * index + step / 2.0

        if port_type is PortType.OUT:
            result = Point(self.width + diameter, total_height)
        elif port_type is PortType.IN:
            result = Point(-diameter, total_height)
        else:
            result = Point()
        return result + offset if offset is not None else result

    def check_hit_scene_point(
        self, port_type: PortType, point: Point, offset: Optional[Point] = None
    ) -> PortIndex:
        """Index of the first port of ``port_type`` near ``point``, or INVALID."""
        if port_type is PortType.NONE:
            return INVALID
        tolerance = 2.0 * StyleCollection.node_style().connection_point_diameter
        for index in range(self._model.n_ports(port_type)):
            if self.port_scene_position(index, port_type, offset).distance_to(point) < tolerance:
                return index
        return INVALID

    def resize_rect(self) -> Rect:
        size = 7
        return Rect(self.width - size, self.height - size, size, size)

    def widget_position(self) -> Point:
        """Top-left position of the embedded widget, or the origin if there is none."""
        widget = self._model.embedded_widget()
        if widget is None:
            return Point()
        x = self.spacing + self.port_width(PortType.IN)
        if widget.expanding:
            return Point(x, self.caption_height())
        if self._model.validation_state() is not NodeValidationState.VALID:
            return Point(
                x,
                (self.caption_height() + self.height - self.validation_height()
                 - self.spacing - widget.height) / 2.0,
            )
        return Point(x, (self.caption_height() + self.height - widget.height) / 2.0)

    def equivalent_widget_height(self) -> int:
        """Largest widget height that does not make the node grow."""
        if self._model.validation_state() is not NodeValidationState.VALID:
            return self.height - self.caption_height() + self.validation_height()
        return self.height - self.caption_height()

    def caption_height(self) -> int:
        if not self._model.caption_visible():
            return 0
        return int(self._bold_font_metrics.bounding_rect(self._model.caption()).height)

    def caption_width(self) -> int:
        if not self._model.caption_visible():
            return 0
        return int(self._bold_font_metrics.bounding_rect(self._model.caption()).width)

    def validation_height(self) -> int:
        message = self._model.validation_message()
        return int(self._bold_font_metrics.bounding_rect(message).height)

    def validation_width(self) -> int:
        message = self._model.validation_message()
        return int(self._bold_font_metrics.bounding_rect(message).width)

    def port_width(self, port_type: PortType) -> int:
        """Width of the widest port label on one side."""
        width = 0
        for index in range(self._model.n_ports(port_type)):
            if self._model.port_caption_visible(port_type, index):
                label = self._model.port_caption(port_type, index)
            else:
                label = self._model.data_type(port_type, index).name
            width = max(width, self._font_metrics.width(label))
        return width

    @staticmethod
    def calculate_node_position_between_node_ports(
        target_port_index: PortIndex,
        target_port: PortType,
        target_node: Any,
        source_port_index: PortIndex,
        source_port: PortType,
        source_node: Any,
        new_node: Any,
    ) -> Point:
        """Position that centres ``new_node`` halfway between two ports.

        Nodes are read through their ``position`` and ``geometry`` attributes.
        """
        midpoint = (
            source_node.position
            + source_node.geometry.port_scene_position(source_port_index, source_port)
            + target_node.position
            + target_node.geometry.port_scene_position(target_port_index, target_port)
        ) / 2.0
        return Point(
            midpoint.x - new_node.geometry.width / 2.0,
            midpoint.y - new_node.geometry.height / 2.0,
        )