from typing import Callable

from intcalc.utils import PrintableEnum

Value = int


def truncating_div(a: Value, b: Value) -> Value:
    """Integer division rounding toward zero, ``-7 / 2 == -3``"""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


class Operator(PrintableEnum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "**"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def priority(self) -> int:
        return OPERATOR_PRIORITIES[self]

    def apply(self, left: Value, right: Value) -> Value:
        return OPERATOR_IMPLS[self](left, right)


OPERATOR_PRIORITIES: dict[Operator, int] = {
    Operator.ADD: 10,
    Operator.SUB: 10,
    Operator.MUL: 20,
    Operator.DIV: 20,
    Operator.POW: 30,
}

OPERATOR_IMPLS: dict[Operator, Callable[[Value, Value], Value]] = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUB: lambda a, b: a - b,
    Operator.MUL: lambda a, b: a * b,
    Operator.DIV: truncating_div,
    Operator.POW: lambda a, b: a**b,
}
