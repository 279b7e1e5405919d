"""Number data types and arithmetic node models."""

from __future__ import annotations

from abc import abstractmethod
from typing import Optional

from flownodes.model import NodeDataModel, NodeValidationState
from flownodes.ports import NodeData, NodeDataType, PortIndex, PortType

_OUT_PORT = 0
_MISSING_INPUTS = "Missing or incorrect inputs"


class DecimalData(NodeData):
    """A floating-point number travelling between nodes."""

    def __init__(self, number: float = 0.0) -> None:
        self.number = float(number)

    def data_type(self) -> NodeDataType:
        return NodeDataType("decimal", "Decimal")

    def number_as_text(self) -> str:
        return f"{self.number:f}"


class IntegerData(NodeData):
    """An integer travelling between nodes."""

    def __init__(self, number: int = 0) -> None:
        self.number = int(number)

    def data_type(self) -> NodeDataType:
        return NodeDataType("integer", "Integer")

    def number_as_text(self) -> str:
        return str(self.number)


class MathOperationDataModel(NodeDataModel):
    """Two decimal inputs, one decimal output, recomputed whenever an input changes."""

    def __init__(self) -> None:
        super().__init__()
        self._number1: Optional[DecimalData] = None
        self._number2: Optional[DecimalData] = None
        self._result: Optional[DecimalData] = None
        self._validation_state = NodeValidationState.VALID
        self._validation_message = ""

    def n_ports(self, port_type: PortType) -> int:
        if port_type is PortType.IN:
            return 2
        if port_type is PortType.OUT:
            return 1
        return 0

    def data_type(self, port_type: PortType, port_index: PortIndex) -> NodeDataType:
        return DecimalData().data_type()

    def set_in_data(self, node_data: Optional[NodeData], port_index: PortIndex) -> None:
        number = node_data if isinstance(node_data, DecimalData) else None
        if port_index == 0:
            self._number1 = number
        else:
            self._number2 = number
        self.compute()

    def out_data(self, port_index: PortIndex) -> Optional[NodeData]:
        return self._result

    def validation_state(self) -> NodeValidationState:
        return self._validation_state

    def validation_message(self) -> str:
        return self._validation_message

    @abstractmethod
    def compute(self) -> None:
        """Recompute the result from the inputs and announce it."""

    def _publish(self, result: Optional[DecimalData],
                 state: NodeValidationState = NodeValidationState.VALID,
                 message: str = "") -> None:
        self._validation_state = state
        self._validation_message = message
        self._result = result
        self.data_updated.emit(_OUT_PORT)

    def _publish_missing(self) -> None:
        self._publish(None, NodeValidationState.WARNING, _MISSING_INPUTS)


class AdditionModel(MathOperationDataModel):
    def caption(self) -> str:
        return "Addition"

    def name(self) -> str:
        return "Addition"

    def compute(self) -> None:
        n1, n2 = self._number1, self._number2
        if n1 is not None and n2 is not None:
            self._publish(DecimalData(n1.number + n2.number))
        else:
            self._publish_missing()


class SubtractionModel(MathOperationDataModel):
    show_port_captions = True

    def caption(self) -> str:
        return "Subtraction"

    def name(self) -> str:
        return "Subtraction"

    def port_caption(self, port_type: PortType, port_index: PortIndex) -> str:
        if port_type is PortType.IN:
            return {0: "Minuend", 1: "Subtrahend"}.get(port_index, "")
        if port_type is PortType.OUT:
            return "Result"
        return ""

    def compute(self) -> None:
        n1, n2 = self._number1, self._number2
        if n1 is not None and n2 is not None:
            self._publish(DecimalData(n1.number - n2.number))
        else:
            self._publish_missing()


class MultiplicationModel(MathOperationDataModel):
    def caption(self) -> str:
        return "Multiplication"

    def name(self) -> str:
        return "Multiplication"

    def compute(self) -> None:
        n1, n2 = self._number1, self._number2
        if n1 is not None and n2 is not None:
            self._publish(DecimalData(n1.number * n2.number))
        else:
            self._publish_missing()


class DivisionModel(MathOperationDataModel):
    show_port_captions = True

    def caption(self) -> str:
        return "Division"

    def name(self) -> str:
        return "Division"

    def port_caption(self, port_type: PortType, port_index: PortIndex) -> str:
        if port_type is PortType.IN:
            return {0: "Dividend", 1: "Divisor"}.get(port_index, "")
        if port_type is PortType.OUT:
            return "Result"
        return ""

    def compute(self) -> None:
        n1, n2 = self._number1, self._number2
        if n2 is not None and n2.number == 0.0:
            self._publish(None, NodeValidationState.ERROR, "Division by zero error")
        elif n1 is not None and n2 is not None:
            self._publish(DecimalData(n1.number / n2.number))
        else:
            self._publish_missing()