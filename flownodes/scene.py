"""The scene: owns nodes and connections and keeps them consistent."""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from flownodes.connection import Connection
from flownodes.geometry import Point, Rect
from flownodes.model import NodeDataModel
from flownodes.node import Node
from flownodes.ports import NodeDataType, PortIndex, PortType, TypeConverter
from flownodes.registry import DataModelRegistry
from flownodes.signals import Signal

_EXTENSION = ".flow"


def _parse_id(raw: Any) -> uuid.UUID:
    try:
        return uuid.UUID(str(raw))
    except ValueError as exc:
        raise ValueError(f"invalid node id {raw!r}") from exc


def _json_index(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


def _data_type_from_json(value: Any) -> NodeDataType:
    value = value if isinstance(value, dict) else {}
    return NodeDataType(str(value.get("id", "")), str(value.get("name", "")))


class FlowScene:
    """Holds nodes and connections, builds them and saves or loads them.

    Signals: ``node_created(node)``, ``node_placed(node)``, ``node_deleted(node)``,
    ``connection_created(c)``, ``connection_deleted(c)``,
    ``node_moved(node, position)``, ``node_double_clicked(node)``,
    ``connection_hovered(c, pos)``, ``node_hovered(node, pos)``,
    ``connection_hover_left(c)``, ``node_hover_left(node)`` and
    ``node_context_menu(node, pos)``.
    """

    def __init__(self, registry: Optional[DataModelRegistry] = None) -> None:
        self.registry = registry if registry is not None else DataModelRegistry()
        self._nodes: dict[uuid.UUID, Node] = {}
        self._connections: dict[uuid.UUID, Connection] = {}

        self.node_created = Signal()
        self.node_placed = Signal()
        self.node_deleted = Signal()
        self.connection_created = Signal()
        self.connection_deleted = Signal()
        self.node_moved = Signal()
        self.node_double_clicked = Signal()
        self.connection_hovered = Signal()
        self.node_hovered = Signal()
        self.connection_hover_left = Signal()
        self.node_hover_left = Signal()
        self.node_context_menu = Signal()

        # The signal wiring must come before notifying the models.
        self.connection_created.connect(self._setup_connection_signals)
        self.connection_created.connect(self._send_connection_created_to_nodes)
        self.connection_deleted.connect(self._send_connection_deleted_to_nodes)

    @property
    def nodes(self) -> Mapping[uuid.UUID, Node]:
        return MappingProxyType(self._nodes)

    @property
    def connections(self) -> Mapping[uuid.UUID, Connection]:
        return MappingProxyType(self._connections)

    # -- connections ---------------------------------------------------------

    def create_connection(self, port_type: PortType, node: Node, port_index: PortIndex) -> Connection:
        """Start a connection at one port; its other end is left free.

        ``connection_created`` is only emitted once the free end is attached.
        """
        connection = Connection(port_type, node, port_index)
        self._connections[connection.id] = connection
        connection.connection_completed.connect(self.connection_created.emit)
        return connection

    def connect_nodes(
        self,
        node_in: Node,
        port_index_in: PortIndex,
        node_out: Node,
        port_index_out: PortIndex,
        converter: Optional[TypeConverter] = None,
    ) -> Connection:
        """Create a complete connection and push the output's current data along it."""
        connection = Connection.between(node_in, port_index_in, node_out, port_index_out, converter)
        node_in.state.set_connection(PortType.IN, port_index_in, connection)
        node_out.state.set_connection(PortType.OUT, port_index_out, connection)

        node_out.on_data_updated(port_index_out)

        self._connections[connection.id] = connection
        self.connection_created.emit(connection)
        return connection

    def restore_connection(self, data: dict[str, Any]) -> Connection:
        """Rebuild a saved connection between nodes already in the scene."""
        node_in_id = _parse_id(data.get("in_id", ""))
        node_out_id = _parse_id(data.get("out_id", ""))
        try:
            node_in = self._nodes[node_in_id]
            node_out = self._nodes[node_out_id]
        except KeyError as exc:
            raise KeyError(f"connection refers to unknown node {exc.args[0]}") from exc

        converter: Optional[TypeConverter] = None
        converter_json = data.get("converter")
        if isinstance(converter_json, dict):
            in_type = _data_type_from_json(converter_json.get("in"))
            out_type = _data_type_from_json(converter_json.get("out"))
            converter = self.registry.get_type_converter(out_type, in_type)

        return self.connect_nodes(
            node_in,
            _json_index(data.get("in_index")),
            node_out,
            _json_index(data.get("out_index")),
            converter,
        )

    def delete_connection(self, connection: Connection) -> None:
        """Remove a connection held by the scene; unknown connections are ignored."""
        if self._connections.pop(connection.id, None) is None:
            return
        connection.remove_from_nodes()
        if connection.is_complete():
            connection.connection_made_incomplete.emit(connection)
        connection.propagate_empty_data()

    # -- nodes ---------------------------------------------------------------

    def _add_node(self, node: Node) -> None:
        self._nodes[node.id] = node

    def create_node(self, model: NodeDataModel) -> Node:
        node = Node(model)
        node.moved.connect(self.node_moved.emit)
        self._add_node(node)
        self.node_created.emit(node)
        return node

    def restore_node(self, data: dict[str, Any]) -> Node:
        """Build a node from saved data; an unregistered model raises ``LookupError``."""
        model_json = data.get("model")
        model_json = model_json if isinstance(model_json, dict) else {}
        model_name = str(model_json.get("name", ""))

        model = self.registry.create(model_name)
        if model is None:
            raise LookupError(f"No registered model with name {model_name}")

        node = Node(model)
        node.moved.connect(self.node_moved.emit)
        node.restore(data)
        self._add_node(node)

        self.node_placed.emit(node)
        self.node_created.emit(node)
        return node

    def remove_node(self, node: Node) -> None:
        """Delete a node together with every connection attached to it."""
        self.node_deleted.emit(node)
        for port_type in (PortType.IN, PortType.OUT):
            attached = [
                connection
                for entry in node.state.get_entries(port_type)
                for connection in entry.values()
            ]
            for connection in attached:
                self.delete_connection(connection)
        self._nodes.pop(node.id, None)

    # -- traversal -----------------------------------------------------------

    def iter_node_data(self) -> Iterator[NodeDataModel]:
        for node in list(self._nodes.values()):
            yield node.model

    def iter_node_data_dependent_order(self) -> Iterator[NodeDataModel]:
        """Models ordered so each comes after the nodes feeding its inputs.

        A cycle of connections raises ``ValueError``.
        """
        visited: set[uuid.UUID] = set()
        nodes = list(self._nodes.values())

        def input_connections(node: Node) -> Iterator[Connection]:
            for entry in node.state.get_entries(PortType.IN):
                yield from entry.values()

        for node in nodes:
            if not any(True for _ in input_connections(node)):
                visited.add(node.id)
                yield node.model

        def inputs_visited(node: Node) -> bool:
            for connection in input_connections(node):
                source = connection.get_node(PortType.OUT)
                if source is not None and source.id not in visited:
                    return False
            return True

        while len(visited) < len(nodes):
            progressed = False
            for node in nodes:
                if node.id in visited:
                    continue
                if inputs_visited(node):
                    visited.add(node.id)
                    progressed = True
                    yield node.model
            if not progressed:
                raise ValueError("nodes are connected in a cycle")

    # -- placement -----------------------------------------------------------

    def node_position(self, node: Node) -> Point:
        return node.position

    def set_node_position(self, node: Node, position: Point) -> None:
        node.position = position

    def node_size(self, node: Node) -> tuple[float, float]:
        """Width and height of the node."""
        return (node.geometry.width, node.geometry.height)

    def all_nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def selected_nodes(self) -> list[Node]:
        return [node for node in self._nodes.values() if node.selected]

    # -- persistence ---------------------------------------------------------

    def clear_scene(self) -> None:
        """Delete all connections first, then all nodes."""
        while self._connections:
            self.delete_connection(next(iter(self._connections.values())))
        while self._nodes:
            self.remove_node(next(iter(self._nodes.values())))

    def save(self, path: str | Path) -> Path:
        """Write the scene to ``path``, adding ``.flow`` unless it already ends in "flow"."""
        target = Path(path)
        if not target.name.lower().endswith("flow"):
            target = target.with_name(target.name + _EXTENSION)
        target.write_bytes(self.save_to_memory())
        return target

    def load(self, path: str | Path) -> bool:
        """Clear the scene and load ``path``; report whether a file was read."""
        self.clear_scene()
        source = Path(path)
        if not source.is_file():
            return False
        try:
            data = source.read_bytes()
        except OSError:
            return False
        self.load_from_memory(data)
        return True

    def save_to_memory(self) -> bytes:
        nodes_json = [node.save() for node in self._nodes.values()]
        connections_json = [
            saved for saved in (c.save() for c in self._connections.values()) if saved
        ]
        document = {"nodes": nodes_json, "connections": connections_json}
        return json.dumps(document, indent=4, sort_keys=True).encode("utf-8")

    def load_from_memory(self, data: bytes | str) -> None:
        """Add the nodes and connections of a saved scene; bad JSON raises ``ValueError``."""
        document = json.loads(data)
        document = document if isinstance(document, dict) else {}

        nodes_json = document.get("nodes")
        for node_json in nodes_json if isinstance(nodes_json, list) else []:
            self.restore_node(node_json if isinstance(node_json, dict) else {})

        connections_json = document.get("connections")
        for connection_json in connections_json if isinstance(connections_json, list) else []:
            self.restore_connection(connection_json if isinstance(connection_json, dict) else {})

    # -- signal handlers -----------------------------------------------------

    def _setup_connection_signals(self, connection: Connection) -> None:
        slot = self.connection_deleted.emit
        if slot not in connection.connection_made_incomplete:
            connection.connection_made_incomplete.connect(slot)

    def _send_connection_created_to_nodes(self, connection: Connection) -> None:
        source = connection.get_node(PortType.OUT)
        sink = connection.get_node(PortType.IN)
        assert source is not None and sink is not None
        source.model.output_connection_created(connection)
        sink.model.input_connection_created(connection)

    def _send_connection_deleted_to_nodes(self, connection: Connection) -> None:
        source = connection.get_node(PortType.OUT)
        sink = connection.get_node(PortType.IN)
        assert source is not None and sink is not None
        source.model.output_connection_deleted(connection)
        sink.model.input_connection_deleted(connection)


def _scene_rect(node: Node) -> Rect:
    local = node.geometry.bounding_rect()
    return Rect(local.x + node.position.x, local.y + node.position.y, local.width, local.height)


def locate_node_at(scene_point: Point, scene: FlowScene) -> Optional[Node]:
    """The topmost (most recently added) node whose bounds contain ``scene_point``."""
    for node in reversed(scene.all_nodes()):
        if _scene_rect(node).contains(scene_point):
            return node
    return None