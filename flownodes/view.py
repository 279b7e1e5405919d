"""A view onto a flow scene: zoom, selection removal, model menu and grid."""

from __future__ import annotations

import logging
import math
from typing import Optional

from flownodes.geometry import Point
from flownodes.node import Node
from flownodes.scene import FlowScene

log = logging.getLogger(__name__)

FINE_GRID_STEP = 15
"""Spacing of the fine background grid."""

COARSE_GRID_STEP = 150
"""Spacing of the coarse background grid."""

_SCALE_STEP = 1.2
_MAX_SCALE_FOR_ZOOM_IN = 2.0

Line = tuple[Point, Point]


class FlowView:
    """Shows a scene at some zoom factor, with ``origin`` at the view's top-left corner."""

    def __init__(self, scene: FlowScene, origin: Optional[Point] = None) -> None:
        self.scene = scene
        self.scale_factor = 1.0
        self.origin = origin if origin is not None else Point()

    def _map_to_scene(self, position: Point) -> Point:
        return self.origin + position / self.scale_factor

    def scale_up(self) -> None:
        """Zoom in one step, unless already zoomed in past the limit."""
        if self.scale_factor > _MAX_SCALE_FOR_ZOOM_IN:
            return
        self.scale_factor *= _SCALE_STEP

    def scale_down(self) -> None:
        """Zoom out one step."""
        self.scale_factor *= _SCALE_STEP ** -1.0

    def scale_uniform(self, value: int) -> None:
        """Set the zoom to ``value`` percent."""
        self.scale_factor = value / 100.0

    def delete_selected_nodes(self) -> None:
        """Remove selected connections, then selected nodes with their connections."""
        selected_connections = [
            connection
            for connection in self.scene.connections.values()
            if getattr(connection, "selected", False)
        ]
        for connection in selected_connections:
            self.scene.delete_connection(connection)

        for node in self.scene.selected_nodes():
            if node.id in self.scene.nodes:
                self.scene.remove_node(node)

    def model_menu(self, filter_text: str = "") -> dict[str, list[str]]:
        """Registered model names by category, keeping those containing ``filter_text``.

        Every category is listed, even when none of its models match; the
        match ignores case.
        """
        registry = self.scene.registry
        menu: dict[str, list[str]] = {category: [] for category in registry.categories()}
        needle = filter_text.casefold()
        for name, category in sorted(registry.registered_models_category_association().items()):
            if needle in name.casefold():
                menu.setdefault(category, []).append(name)
        return menu

    def create_node_at(self, model_name: str, position: Point) -> Optional[Node]:
        """Create a registered model at a view position; None if the name is unknown."""
        model = self.scene.registry.create(model_name)
        if model is None:
            log.debug("Model not found: %s", model_name)
            return None
        node = self.scene.create_node(model)
        node.position = self._map_to_scene(position)
        self.scene.node_placed.emit(node)
        return node

    def grid_lines(self, top_left: Point, bottom_right: Point, grid_step: float) -> list[Line]:
        """Vertical then horizontal grid lines covering the given scene area."""
        left = math.floor(top_left.x / grid_step - 0.5)
        right = math.floor(bottom_right.x / grid_step + 1.0)
        bottom = math.floor(top_left.y / grid_step - 0.5)
        top = math.floor(bottom_right.y / grid_step + 1.0)

        vertical = [
            (Point(xi * grid_step, bottom * grid_step), Point(xi * grid_step, top * grid_step))
            for xi in range(left, right + 1)
        ]
        horizontal = [
            (Point(left * grid_step, yi * grid_step), Point(right * grid_step, yi * grid_step))
            for yi in range(bottom, top + 1)
        ]
        return vertical + horizontal