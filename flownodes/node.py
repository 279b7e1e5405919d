"""A node in the flow graph: its model, its connections and its place on the canvas."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, Optional

from flownodes.geometry import NodeGeometry, Point
from flownodes.node_state import NodeState, ReactToConnectionState
from flownodes.ports import NodeData, NodeDataType, PortIndex, PortType
from flownodes.signals import Signal

if TYPE_CHECKING:
    from flownodes.model import NodeDataModel


def _format_id(node_id: uuid.UUID) -> str:
    return "{" + str(node_id) + "}"


def _json_number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


class Node:
    """Owns a data model together with its connection state and layout.

    ``moved(node, position)`` is emitted whenever the position changes.
    """

    def __init__(self, model: "NodeDataModel", node_id: Optional[uuid.UUID] = None) -> None:
        self.id: uuid.UUID = node_id if node_id is not None else uuid.uuid4()
        self.model = model
        self.state = NodeState(model)
        self.geometry = NodeGeometry(model)
        self.locked = False
        self.selected = False
        self.moved = Signal()
        self._position = Point()

        self.geometry.recalculate_size()

        model.data_updated.connect(self.on_data_updated)
        model.embedded_widget_size_updated.connect(self.on_node_size_updated)

    @property
    def position(self) -> Point:
        return self._position

    @position.setter
    def position(self, value: Point) -> None:
        self._position = value
        self.move_connections()
        self.moved.emit(self, value)

    def save(self) -> dict[str, Any]:
        return {
            "id": _format_id(self.id),
            "model": self.model.save(),
            "position": {"x": self._position.x, "y": self._position.y},
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Apply a saved node; a malformed id raises ``ValueError``."""
        raw_id = data.get("id", "")
        try:
            self.id = uuid.UUID(str(raw_id))
        except ValueError as exc:
            raise ValueError(f"invalid node id {raw_id!r}") from exc

        position = data.get("position")
        position = position if isinstance(position, dict) else {}
        self.position = Point(_json_number(position.get("x")), _json_number(position.get("y")))

        model_data = data.get("model")
        self.model.restore(model_data if isinstance(model_data, dict) else {})

    def react_to_possible_connection(
        self, port_type: PortType, data_type: NodeDataType, scene_point: Point
    ) -> None:
        """Remember a connection being dragged nearby, in node coordinates."""
        self.geometry.dragging_pos = scene_point - self._position
        self.state.set_reaction(ReactToConnectionState.REACTING, port_type, data_type)

    def reset_reaction_to_connection(self) -> None:
        self.state.set_reaction(ReactToConnectionState.NOT_REACTING)

    def propagate_data(self, node_data: Optional[NodeData], in_port_index: PortIndex) -> None:
        """Hand incoming data to the model and refresh the layout."""
        self.model.set_in_data(node_data, in_port_index)
        self.geometry.recalculate_size()
        self.move_connections()

    def on_data_updated(self, index: PortIndex) -> None:
        """Send the model's output on port ``index`` along every connection there."""
        node_data = self.model.out_data(index)
        for connection in self.state.connections(PortType.OUT, index).values():
            connection.propagate_data(node_data)

    def on_node_size_updated(self) -> None:
        self.geometry.recalculate_size()
        self.move_connections()

    def move_connections(self) -> None:
        """Bring the ends of all attached connections to their ports."""
        for port_type in (PortType.IN, PortType.OUT):
            for entry in self.state.get_entries(port_type):
                for connection in list(entry.values()):
                    connection.move()

    def lock(self, locked: bool) -> None:
        self.locked = locked