"""Port kinds, port addresses and the data passed between nodes."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

INVALID = -1
"""Port index meaning "no port"."""

PortIndex = int


class PortType(enum.Enum):
    """Which side of a node a port is on."""

    NONE = "none"
    IN = "in"
    OUT = "out"


@dataclass
class Port:
    """A port address: its side and its index on that side."""

    type: PortType = PortType.NONE
    index: PortIndex = INVALID

    def index_is_valid(self) -> bool:
        return self.index != INVALID

    def port_type_is_valid(self) -> bool:
        return self.type is not PortType.NONE


def opposite_port(port: PortType) -> PortType:
    """Return the other side of a connection; NONE maps to NONE."""
    if port is PortType.IN:
        return PortType.OUT
    if port is PortType.OUT:
        return PortType.IN
    return PortType.NONE


@dataclass(frozen=True)
class NodeDataType:
    """Identifies a kind of data; ``id`` is what types are compared by."""

    id: str = ""
    name: str = ""


class NodeData(ABC):
    """Base class for values that travel along connections."""

    @abstractmethod
    def data_type(self) -> NodeDataType:
        """Describe the type of this value."""

    def same_type(self, other: "NodeData") -> bool:
        return self.data_type().id == other.data_type().id


TypeConverter = Callable[[Optional[NodeData]], Optional[NodeData]]
"""Turns data of one type into data of another."""