"""Operations on a node and a connection being dragged onto or off it."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from flownodes.model import ConnectionPolicy
from flownodes.ports import INVALID, PortIndex, PortType, TypeConverter, opposite_port

if TYPE_CHECKING:
    from flownodes.connection import Connection
    from flownodes.node import Node


class NodeConnectionInteraction:
    """Checks and performs attaching a connection's free end to a node's port.

    ``scene`` is anything with a ``registry`` holding type converters.
    """

    def __init__(self, node: "Node", connection: "Connection", scene: Any) -> None:
        self._node = node
        self._connection = connection
        self._scene = scene

    def can_connect(self) -> Optional[tuple[PortIndex, Optional[TypeConverter]]]:
        """Port index and needed converter if the free end can attach here, else None.

        Requires a free end, a different node, the end lying over a vacant
        port, and matching types or a registered converter between them.
        """
        required = self._connection.required_port
        if required is PortType.NONE:
            return None

        if self._connection.get_node(opposite_port(required)) is self._node:
            return None

        end_point = self._connection.geometry.get_end_point(required)
        port_index = self._node.geometry.check_hit_scene_point(
            required, end_point, self._node.position
        )
        if port_index == INVALID:
            return None

        if not self._port_is_vacant(required, port_index):
            return None

        connection_type = self._connection.data_type(opposite_port(required))
        candidate_type = self._node.model.data_type(required, port_index)
        if connection_type.id == candidate_type.id:
            return port_index, None

        registry = self._scene.registry
        if required is PortType.IN:
            converter = registry.get_type_converter(connection_type, candidate_type)
        else:
            converter = registry.get_type_converter(candidate_type, connection_type)
        if converter is None:
            return None
        return port_index, converter

    def try_connect(self) -> bool:
        """Attach the free end if possible and start data flowing; report success."""
        result = self.can_connect()
        if result is None:
            return False
        port_index, converter = result

        if converter is not None:
            self._connection.converter = converter

        required = self._connection.required_port
        self._node.state.set_connection(required, port_index, self._connection)
        self._connection.set_node_to_port(self._node, required, port_index)
        self._node.move_connections()

        out_node = self._connection.get_node(PortType.OUT)
        if out_node is not None:
            out_node.on_data_updated(self._connection.get_port_index(PortType.OUT))
        return True

    def disconnect(self, port_to_disconnect: PortType) -> bool:
        """Detach the connection from this node's port and make that end free again."""
        port_index = self._connection.get_port_index(port_to_disconnect)
        self._node.state.get_entries(port_to_disconnect)[port_index].clear()
        self._connection.propagate_empty_data()
        self._connection.clear_node(port_to_disconnect)
        self._connection.set_required_port(port_to_disconnect)
        return True

    def _port_is_vacant(self, port_type: PortType, port_index: PortIndex) -> bool:
        if not self._node.state.get_entries(port_type)[port_index]:
            return True
        policy = self._node.model.port_out_connection_policy(port_index)
        return port_type is PortType.OUT and policy is ConnectionPolicy.MANY