"""Connections between node ports, complete or still being dragged."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from flownodes.geometry import Point
from flownodes.ports import (
    INVALID,
    NodeData,
    NodeDataType,
    PortIndex,
    PortType,
    TypeConverter,
    opposite_port,
)
from flownodes.signals import Signal

if TYPE_CHECKING:
    from flownodes.node import Node


def _check_side(port_type: PortType) -> None:
    if port_type is PortType.NONE:
        raise ValueError("a connection end must be IN or OUT")


@dataclass
class ConnectionGeometry:
    """End points of a connection and how it is drawn."""

    sink: Point = field(default_factory=Point)
    source: Point = field(default_factory=Point)
    line_width: float = 3.0
    hovered: bool = False

    def get_end_point(self, port_type: PortType) -> Point:
        _check_side(port_type)
        return self.source if port_type is PortType.OUT else self.sink

    def set_end_point(self, port_type: PortType, point: Point) -> None:
        _check_side(port_type)
        if port_type is PortType.OUT:
            self.source = point
        else:
            self.sink = point

    def move_end_point(self, port_type: PortType, offset: Point) -> None:
        self.set_end_point(port_type, self.get_end_point(port_type) + offset)


class Connection:
    """Links an output port of one node to an input port of another.

    A connection made from a single port leaves its other end ``required``
    until a node is attached there. Signals: ``connection_completed(c)``,
    ``connection_made_incomplete(c)`` and ``updated(c)``.
    """

    def __init__(self, port_type: PortType, node: "Node", port_index: PortIndex) -> None:
        self._reset()
        self.set_node_to_port(node, port_type, port_index)
        self.set_required_port(opposite_port(port_type))
        self.move()
        self.geometry.set_end_point(self.required_port, self.geometry.get_end_point(port_type))

    def _reset(self) -> None:
        self.id: uuid.UUID = uuid.uuid4()
        self._nodes: dict[PortType, Optional["Node"]] = {PortType.IN: None, PortType.OUT: None}
        self._port_indices: dict[PortType, PortIndex] = {PortType.IN: INVALID, PortType.OUT: INVALID}
        self.required_port = PortType.NONE
        self.geometry = ConnectionGeometry()
        self.converter: Optional[TypeConverter] = None
        self.connection_completed = Signal()
        self.connection_made_incomplete = Signal()
        self.updated = Signal()

    @classmethod
    def between(
        cls,
        node_in: "Node",
        port_index_in: PortIndex,
        node_out: "Node",
        port_index_out: PortIndex,
        converter: Optional[TypeConverter] = None,
    ) -> "Connection":
        """A complete connection from ``node_out`` to ``node_in``."""
        connection = cls.__new__(cls)
        connection._reset()
        connection.converter = converter
        connection.set_node_to_port(node_in, PortType.IN, port_index_in)
        connection.set_node_to_port(node_out, PortType.OUT, port_index_out)
        connection.move()
        return connection

    def save(self) -> dict[str, Any]:
        """Both ends and the converter's types; empty if the connection is incomplete."""
        node_in = self._nodes[PortType.IN]
        node_out = self._nodes[PortType.OUT]
        if node_in is None or node_out is None:
            return {}
        data: dict[str, Any] = {
            "in_id": "{" + str(node_in.id) + "}",
            "in_index": self._port_indices[PortType.IN],
            "out_id": "{" + str(node_out.id) + "}",
            "out_index": self._port_indices[PortType.OUT],
        }
        if self.converter is not None:
            data["converter"] = {
                "in": _type_json(self.data_type(PortType.IN)),
                "out": _type_json(self.data_type(PortType.OUT)),
            }
        return data

    def set_required_port(self, port_type: PortType) -> None:
        """Mark the end being dragged and detach it from its node."""
        self.required_port = port_type
        if port_type is not PortType.NONE:
            self._nodes[port_type] = None
            self._port_indices[port_type] = INVALID

    def set_node_to_port(self, node: "Node", port_type: PortType, port_index: PortIndex) -> None:
        """Attach ``node`` at one end; emits ``connection_completed`` when this completes it."""
        _check_side(port_type)
        was_incomplete = not self.is_complete()
        self._nodes[port_type] = node
        self._port_indices[port_type] = port_index
        self.required_port = PortType.NONE
        self.updated.emit(self)
        if was_incomplete and self.is_complete():
            self.connection_completed.emit(self)

    def remove_from_nodes(self) -> None:
        """Drop this connection from the states of the nodes it is attached to."""
        for port_type in (PortType.IN, PortType.OUT):
            node = self._nodes[port_type]
            if node is not None:
                node.state.erase_connection(port_type, self._port_indices[port_type], self.id)

    def get_node(self, port_type: PortType) -> Optional["Node"]:
        _check_side(port_type)
        return self._nodes[port_type]

    def get_port_index(self, port_type: PortType) -> PortIndex:
        _check_side(port_type)
        return self._port_indices[port_type]

    def clear_node(self, port_type: PortType) -> None:
        """Detach one end; ``connection_made_incomplete`` fires while both ends are still set."""
        _check_side(port_type)
        if self.is_complete():
            self.connection_made_incomplete.emit(self)
        self._nodes[port_type] = None
        self._port_indices[port_type] = INVALID

    def data_type(self, port_type: PortType) -> NodeDataType:
        """Type at one end, or at whichever end is attached if incomplete."""
        if self.is_complete():
            node = self._nodes[port_type]
            assert node is not None
            return node.model.data_type(port_type, self._port_indices[port_type])
        for side in (PortType.IN, PortType.OUT):
            node = self._nodes[side]
            if node is not None:
                return node.model.data_type(side, self._port_indices[side])
        raise RuntimeError("connection is not attached to any node")

    def is_complete(self) -> bool:
        return self._nodes[PortType.IN] is not None and self._nodes[PortType.OUT] is not None

    def propagate_data(self, node_data: Optional[NodeData]) -> None:
        """Deliver data to the input end, converted if a converter is set."""
        node_in = self._nodes[PortType.IN]
        if node_in is None:
            return
        if self.converter is not None:
            node_data = self.converter(node_data)
        node_in.propagate_data(node_data, self._port_indices[PortType.IN])

    def propagate_empty_data(self) -> None:
        self.propagate_data(None)

    def move(self) -> None:
        """Place each attached end at its node's port."""
        for port_type in (PortType.OUT, PortType.IN):
            node = self._nodes[port_type]
            if node is not None:
                point = node.geometry.port_scene_position(
                    self._port_indices[port_type], port_type, node.position
                )
                self.geometry.set_end_point(port_type, point)


def _type_json(data_type: NodeDataType) -> dict[str, str]:
    return {"id": data_type.id, "name": data_type.name}