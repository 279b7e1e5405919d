"""Per-node record of attached connections and drag-reaction state."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Optional

from flownodes.ports import NodeDataType, PortIndex, PortType

if TYPE_CHECKING:
    from flownodes.model import NodeDataModel

ConnectionMap = dict[Any, Any]
"""Connections on one port, keyed by connection id."""


class ReactToConnectionState(enum.Enum):
    REACTING = "reacting"
    NOT_REACTING = "not_reacting"


class NodeState:
    """Connections on each port and how the node reacts to a dragged connection.

    Connections are stored by their ``id`` attribute.
    """

    def __init__(self, model: "NodeDataModel") -> None:
        self._in: list[ConnectionMap] = [{} for _ in range(model.n_ports(PortType.IN))]
        self._out: list[ConnectionMap] = [{} for _ in range(model.n_ports(PortType.OUT))]
        self.reaction = ReactToConnectionState.NOT_REACTING
        self.reacting_port_type = PortType.NONE
        self.reacting_data_type = NodeDataType()
        self.resizing = False

    def get_entries(self, port_type: PortType) -> list[ConnectionMap]:
        """The per-port connection maps of one side (IN, otherwise OUT)."""
        return self._in if port_type is PortType.IN else self._out

    def _entry(self, port_type: PortType, port_index: PortIndex) -> ConnectionMap:
        entries = self.get_entries(port_type)
        if not 0 <= port_index < len(entries):
            raise IndexError(f"port index {port_index} out of range for {port_type.name}")
        return entries[port_index]

    def connections(self, port_type: PortType, port_index: PortIndex) -> ConnectionMap:
        """A copy of the connections on one port."""
        return dict(self._entry(port_type, port_index))

    def set_connection(self, port_type: PortType, port_index: PortIndex, connection: Any) -> None:
        self._entry(port_type, port_index)[connection.id] = connection

    def erase_connection(self, port_type: PortType, port_index: PortIndex, connection_id: Any) -> None:
        self._entry(port_type, port_index).pop(connection_id, None)

    def set_reaction(
        self,
        reaction: ReactToConnectionState,
        reacting_port_type: PortType = PortType.NONE,
        reacting_data_type: Optional[NodeDataType] = None,
    ) -> None:
        self.reaction = reaction
        self.reacting_port_type = reacting_port_type
        self.reacting_data_type = reacting_data_type if reacting_data_type is not None else NodeDataType()

    def is_reacting(self) -> bool:
        return self.reaction is ReactToConnectionState.REACTING