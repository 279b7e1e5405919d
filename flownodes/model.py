"""The interface every node's data model implements."""

from __future__ import annotations

import copy
import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Mapping, Optional

from flownodes.ports import NodeData, NodeDataType, PortIndex, PortType
from flownodes.signals import Signal
from flownodes.styles import StyleCollection

if TYPE_CHECKING:
    from flownodes.styles import NodeStyle


class NodeValidationState(enum.Enum):
    VALID = "valid"
    WARNING = "warning"
    ERROR = "error"


class ConnectionPolicy(enum.Enum):
    """How many connections an output port accepts."""

    ONE = "one"
    MANY = "many"


@dataclass
class EmbeddedWidget:
    """Size description of a widget shown inside a node."""

    width: int = 0
    height: int = 0
    expanding: bool = False


class NodeDataModel(ABC):
    """Describes a node's ports and computes its outputs from its inputs.

    Signals: ``data_updated(port_index)``, ``data_invalidated(port_index)``,
    ``computing_started()``, ``computing_finished()`` and
    ``embedded_widget_size_updated()``.

    Subclasses may set ``show_port_captions`` and ``port_captions`` (keyed by
    ``(port_type, port_index)``) instead of overriding the caption methods,
    and may assign ``widget`` to embed a widget in the node.
    """

    show_port_captions: ClassVar[bool] = False
    port_captions: ClassVar[Mapping[tuple[PortType, int], str]] = {}

    def __init__(self) -> None:
        self.node_style: NodeStyle = copy.copy(StyleCollection.node_style())
        self.widget: Optional[EmbeddedWidget] = None
        self.extra_state: dict[str, Any] = {}
        self.input_connections: list[Any] = []
        self.output_connections: list[Any] = []
        self.data_updated = Signal()
        self.data_invalidated = Signal()
        self.computing_started = Signal()
        self.computing_finished = Signal()
        self.embedded_widget_size_updated = Signal()

    @abstractmethod
    def caption(self) -> str:
        """Text shown on the node."""

    def caption_visible(self) -> bool:
        return True

    def port_caption(self, port_type: PortType, port_index: PortIndex) -> str:
        return self.port_captions.get((port_type, port_index), "")

    def port_caption_visible(self, port_type: PortType, port_index: PortIndex) -> bool:
        return self.show_port_captions

    @abstractmethod
    def name(self) -> str:
        """Unique name of the model."""

    def save(self) -> dict[str, Any]:
        return {**self.extra_state, "name": self.name()}

    def restore(self, data: dict[str, Any]) -> None:
        """Keep any saved entries besides the name so that ``save`` writes them back."""
        self.extra_state = {key: value for key, value in data.items() if key != "name"}

    @abstractmethod
    def n_ports(self, port_type: PortType) -> int:
        """Number of ports on the given side."""

    @abstractmethod
    def data_type(self, port_type: PortType, port_index: PortIndex) -> NodeDataType:
        """Type of data carried by a port."""

    def port_out_connection_policy(self, port_index: PortIndex) -> ConnectionPolicy:
        return ConnectionPolicy.MANY

    @abstractmethod
    def set_in_data(self, node_data: Optional[NodeData], port_index: PortIndex) -> None:
        """Receive data on an input port."""

    @abstractmethod
    def out_data(self, port_index: PortIndex) -> Optional[NodeData]:
        """Current data on an output port."""

    def embedded_widget(self) -> Optional[EmbeddedWidget]:
        return self.widget

    def resizable(self) -> bool:
        return False

    def validation_state(self) -> NodeValidationState:
        return NodeValidationState.VALID

    def validation_message(self) -> str:
        return ""

    def input_connection_created(self, connection: Any) -> None:
        """Record a completed connection into this node."""
        if connection not in self.input_connections:
            self.input_connections.append(connection)

    def input_connection_deleted(self, connection: Any) -> None:
        """Forget a removed connection into this node."""
        if connection in self.input_connections:
            self.input_connections.remove(connection)

    def output_connection_created(self, connection: Any) -> None:
        """Record a completed connection out of this node."""
        if connection not in self.output_connections:
            self.output_connections.append(connection)

    def output_connection_deleted(self, connection: Any) -> None:
        """Forget a removed connection out of this node."""
        if connection in self.output_connections:
            self.output_connections.remove(connection)