import logging
from dataclasses import dataclass

from intcalc.tokenizer import Number, Paren, Token
from intcalc.value import Operator, Value

logger = logging.getLogger(__name__)


@dataclass
class CalculatorError(Exception):
    errmsg: str
    position: int | None = None

    def __str__(self) -> str:
        return f"[Calculator error] {self.errmsg}"


@dataclass
class NumberExpected(CalculatorError):
    errmsg: str = "Number expected"


@dataclass
class OperationExpected(CalculatorError):
    errmsg: str = "Operation expected"


@dataclass
class UnmatchedParen(CalculatorError):
    errmsg: str = "Unmatched parenthesis"


@dataclass
class DivisionByZero(CalculatorError):
    errmsg: str = "Division by zero"


@dataclass
class NegativeExponent(CalculatorError):
    errmsg: str = "Negative exponent"


@dataclass
class Empty:
    pass


@dataclass
class Neg:
    """Odd number of unary minuses seen since the last operand"""


@dataclass
class Operand:
    value: Value


CalculatorState = Empty | Neg | Operand


@dataclass
class Operation:
    left: Value
    operator: Operator

    def execute(self, right: Value) -> Value:
        if self.operator is Operator.DIV and right == 0:
            raise DivisionByZero()
        if self.operator is Operator.POW and right < 0:
            raise NegativeExponent()
        return self.operator.apply(self.left, right)


@dataclass
class ParenFrame:
    negate: bool = False
    implicit_mul: bool = False


PendingEntry = Operation | ParenFrame


class Calculator:
    """Evaluates a token stream in a single pass using precedence climbing.

    Operations waiting for their right operand are kept on ``pending`` together
    with markers for open parenthesis groups. An incoming operator first folds every
    pending operation of the same or higher priority, so equal priorities associate
    to the left. Nothing is evaluated past a ``ParenFrame`` until the matching
    closing parenthesis arrives.
    """

    def __init__(self) -> None:
        self.state: CalculatorState = Empty()
        self.pending: list[PendingEntry] = []

    def handle_token(self, token: Token) -> None:
        state = self.state
        if isinstance(state, (Empty, Neg)):
            if isinstance(token, Number):
                self.state = Operand(-token.value if isinstance(state, Neg) else token.value)
            elif token is Operator.SUB:
                # double negative sign, cancel each other out
                self.state = Empty() if isinstance(state, Neg) else Neg()
            elif token is Operator.ADD:
                pass
            elif token is Paren.OPEN:
                self.pending.append(ParenFrame(negate=isinstance(state, Neg)))
                self.state = Empty()
            else:
                raise NumberExpected()
        elif isinstance(state, Operand):
            if isinstance(token, Number):
                raise OperationExpected()
            elif isinstance(token, Operator):
                self._prioritized_push(Operation(left=state.value, operator=token))
                self.state = Empty()
            elif token is Paren.OPEN:
                self.pending.append(Operation(left=state.value, operator=Operator.MUL))
                self.pending.append(ParenFrame(implicit_mul=True))
                self.state = Empty()
            elif token is Paren.CLOSE:
                self.state = Operand(self._close_group(state.value))
            else:
                raise RuntimeError(f"Unexpected token: {token}")
        else:
            raise RuntimeError(f"Unexpected calculator state: {state}")

    def finalize(self) -> Value:
        try:
            if any(isinstance(entry, ParenFrame) for entry in self.pending):
                raise UnmatchedParen("Unclosed parenthesis")
            if not isinstance(self.state, Operand):
                raise NumberExpected()
            value = self._fold(self.state.value)
            logger.debug("Expression evaluated to %d", value)
            return value
        finally:
            self.reset()

    def reset(self) -> None:
        self.state = Empty()
        self.pending.clear()

    def _prioritized_push(self, new: Operation) -> None:
        new.left = self._fold(new.left, min_priority=new.operator.priority)
        self.pending.append(new)

    def _fold(self, value: Value, min_priority: int = 0) -> Value:
        """Applies pending operations down to the innermost open group"""
        while self.pending:
            top = self.pending[-1]
            if not isinstance(top, Operation) or top.operator.priority < min_priority:
                break
            self.pending.pop()
            logger.debug("Folding %d %s %d", top.left, top.operator.symbol, value)
            value = top.execute(value)
        return value

    def _close_group(self, value: Value) -> Value:
        value = self._fold(value)
        if not self.pending:
            raise UnmatchedParen("Unmatched closing parenthesis")
        frame = self.pending.pop()
        assert isinstance(frame, ParenFrame)
        logger.debug("Closing group (negate=%s, implicit_mul=%s) with %d", frame.negate, frame.implicit_mul, value)
        return -value if frame.negate else value
