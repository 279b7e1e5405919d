"""Colours and the JSON-configurable node and view styles."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

log = logging.getLogger(__name__)

_HEX = re.compile(r"#([0-9a-fA-F]+)")

_NAMED_COLORS = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
    "red": (255, 0, 0),
    "green": (0, 128, 0),
    "lime": (0, 255, 0),
    "blue": (0, 0, 255),
    "yellow": (255, 255, 0),
    "cyan": (0, 255, 255),
    "aqua": (0, 255, 255),
    "magenta": (255, 0, 255),
    "fuchsia": (255, 0, 255),
    "gray": (128, 128, 128),
    "grey": (128, 128, 128),
    "darkgray": (169, 169, 169),
    "darkgrey": (169, 169, 169),
    "lightgray": (211, 211, 211),
    "lightgrey": (211, 211, 211),
    "dimgray": (105, 105, 105),
    "darkred": (139, 0, 0),
    "darkgreen": (0, 100, 0),
    "darkblue": (0, 0, 139),
    "orange": (255, 165, 0),
    "olive": (128, 128, 0),
    "navy": (0, 0, 128),
    "purple": (128, 0, 128),
    "teal": (0, 128, 128),
    "silver": (192, 192, 192),
    "skyblue": (135, 206, 235),
    "lightblue": (173, 216, 230),
}


@dataclass(frozen=True)
class Color:
    """An RGBA colour; ``valid`` is False for values that could not be read."""

    red: int
    green: int
    blue: int
    alpha: int = 255
    valid: bool = True

    @staticmethod
    def parse(value: Any) -> "Color":
        """Read a colour from ``[r, g, b]``, ``#rgb``, ``#rrggbb``, ``#aarrggbb`` or a name.

        Unreadable strings and out-of-range components give an invalid colour.
        """
        if isinstance(value, Color):
            return value
        if isinstance(value, (list, tuple)):
            if len(value) < 3:
                raise ValueError(f"colour array needs three components, got {value!r}")
            r, g, b = (_json_int(v) for v in value[:3])
            return _rgb(r, g, b)
        if not isinstance(value, str):
            return _INVALID
        text = value.strip()
        match = _HEX.fullmatch(text)
        if match:
            digits = match.group(1)
            if len(digits) == 3:
                r, g, b = (int(d, 16) * 17 for d in digits)
                return Color(r, g, b)
            if len(digits) == 6:
                return Color(*(int(digits[i:i + 2], 16) for i in (0, 2, 4)))
            if len(digits) == 8:
                a, r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4, 6))
                return Color(r, g, b, a)
            return _INVALID
        lowered = text.lower()
        if lowered == "transparent":
            return Color(0, 0, 0, 0)
        if lowered in _NAMED_COLORS:
            return Color(*_NAMED_COLORS[lowered])
        return _INVALID


_INVALID = Color(0, 0, 0, 255, valid=False)


def _rgb(r: int, g: int, b: int) -> Color:
    if all(0 <= c <= 255 for c in (r, g, b)):
        return Color(r, g, b)
    return _INVALID


def _json_int(value: Any) -> int:
    """Integral JSON numbers convert; anything else reads as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not value.is_integer():
        return 0
    return int(value)


def _json_float(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def _json_key(field_name: str) -> str:
    return "".join(part.capitalize() for part in field_name.split("_"))


class Style:
    """Base for styles read from one named section of a JSON document.

    Every colour and number field is read on each load; a key missing from
    the section leaves an invalid colour or ``0.0``.
    """

    section: ClassVar[str] = ""

    def _apply_json_text(self, text: str) -> None:
        document = json.loads(text)
        top = document if isinstance(document, dict) else {}
        values = top.get(self.section)
        self._apply(values if isinstance(values, dict) else {})

    def _apply_json_file(self, path: str | Path) -> None:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError:
            log.warning("Couldn't open file %s", path)
            return
        self._apply_json_text(text)

    def _apply(self, values: dict[str, Any]) -> None:
        for f in fields(self):  # type: ignore[arg-type]
            raw = values.get(_json_key(f.name))
            if isinstance(getattr(self, f.name), Color):
                setattr(self, f.name, Color.parse(raw) if raw is not None else _INVALID)
            else:
                setattr(self, f.name, _json_float(raw))


@dataclass
class NodeStyle(Style):
    """Colours and sizes used to draw nodes."""

    section: ClassVar[str] = "NodeStyle"

    normal_boundary_color: Color = field(default=Color(255, 255, 255))
    selected_boundary_color: Color = field(default=Color(255, 165, 0))
    gradient_color0: Color = field(default=Color(128, 128, 128))
    gradient_color1: Color = field(default=Color(80, 80, 80))
    gradient_color2: Color = field(default=Color(64, 64, 64))
    gradient_color3: Color = field(default=Color(58, 58, 58))
    shadow_color: Color = field(default=Color(20, 20, 20))
    font_color: Color = field(default=Color(255, 255, 255))
    font_color_faded: Color = field(default=Color(128, 128, 128))
    connection_point_color: Color = field(default=Color(169, 169, 169))
    filled_connection_point_color: Color = field(default=Color(0, 255, 255))
    warning_color: Color = field(default=Color(128, 128, 0))
    error_color: Color = field(default=Color(255, 0, 0))
    pen_width: float = 1.0
    hovered_pen_width: float = 1.5
    connection_point_diameter: float = 8.0
    opacity: float = 0.8

    @classmethod
    def from_json(cls, text: str) -> "NodeStyle":
        """Build a style from the ``NodeStyle`` section of a JSON document."""
        style = cls()
        style.load_json_text(text)
        return style

    def load_json_text(self, text: str) -> None:
        """Apply a JSON document; malformed JSON raises ``ValueError``."""
        self._apply_json_text(text)

    def load_json_file(self, path: str | Path) -> None:
        """Apply a JSON file; an unreadable file is logged and ignored."""
        self._apply_json_file(path)


@dataclass
class FlowViewStyle(Style):
    """Colours of the view background and its grid."""

    section: ClassVar[str] = "FlowViewStyle"

    background_color: Color = field(default=Color(53, 53, 53))
    fine_grid_color: Color = field(default=Color(60, 60, 60))
    coarse_grid_color: Color = field(default=Color(25, 25, 25))

    @classmethod
    def from_json(cls, text: str) -> "FlowViewStyle":
        """Build a style from the ``FlowViewStyle`` section of a JSON document."""
        style = cls()
        style.load_json_text(text)
        return style

    def load_json_text(self, text: str) -> None:
        """Apply a JSON document; malformed JSON raises ``ValueError``."""
        self._apply_json_text(text)

    def load_json_file(self, path: str | Path) -> None:
        """Apply a JSON file; an unreadable file is logged and ignored."""
        self._apply_json_file(path)


class StyleCollection:
    """Process-wide current styles."""

    _node_style: ClassVar[NodeStyle] = NodeStyle()
    _flow_view_style: ClassVar[FlowViewStyle] = FlowViewStyle()

    @classmethod
    def node_style(cls) -> NodeStyle:
        return cls._node_style

    @classmethod
    def flow_view_style(cls) -> FlowViewStyle:
        return cls._flow_view_style

    @classmethod
    def set_node_style(cls, style: NodeStyle) -> None:
        cls._node_style = style

    @classmethod
    def set_flow_view_style(cls, style: FlowViewStyle) -> None:
        cls._flow_view_style = style


def set_node_style(json_text: str) -> None:
    """Make the style described by ``json_text`` the current node style."""
    StyleCollection.set_node_style(NodeStyle.from_json(json_text))


def set_flow_view_style(json_text: str) -> None:
    """Make the style described by ``json_text`` the current view style."""
    StyleCollection.set_flow_view_style(FlowViewStyle.from_json(json_text))