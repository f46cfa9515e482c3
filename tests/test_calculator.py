import pytest

from intcalc.calculator import (
    Calculator,
    DivisionByZero,
    Empty,
    Neg,
    NumberExpected,
    Operand,
    Operation,
    OperationExpected,
    ParenFrame,
    UnmatchedParen,
)
from intcalc.tokenizer import Number, Paren, Token
from intcalc.value import Operator


def feed(calculator: Calculator, tokens: list[Token]) -> None:
    for token in tokens:
        calculator.handle_token(token)


@pytest.mark.parametrize(
    "tokens, expected_state",
    [
        pytest.param([Number(1)], Operand(1)),
        pytest.param([Operator.SUB], Neg()),
        pytest.param([Operator.SUB, Operator.SUB], Empty()),
        pytest.param([Operator.SUB, Number(1)], Operand(-1)),
        pytest.param([Operator.ADD], Empty()),
        pytest.param([Operator.SUB, Operator.ADD], Neg()),
        pytest.param([Number(1), Operator.MUL], Empty()),
    ],
)
def test_state_transitions(tokens: list[Token], expected_state: object) -> None:
    calculator = Calculator()
    feed(calculator, tokens)
    assert calculator.state == expected_state


def test_precedence_climbing_stack() -> None:
    calculator = Calculator()
    feed(calculator, [Number(2), Operator.ADD, Number(3), Operator.MUL, Number(4)])
    assert calculator.pending == [Operation(2, Operator.ADD), Operation(3, Operator.MUL)]
    calculator.handle_token(Operator.SUB)
    # both pending operations have priority >= SUB and are folded
    assert calculator.pending == [Operation(14, Operator.SUB)]


def test_negated_group() -> None:
    calculator = Calculator()
    feed(calculator, [Operator.SUB, Paren.OPEN])
    assert calculator.pending == [ParenFrame(negate=True)]
    assert calculator.state == Empty()
    feed(calculator, [Number(2), Operator.ADD, Number(3), Paren.CLOSE])
    assert calculator.pending == []
    assert calculator.state == Operand(-5)


def test_implicit_multiplication_stack() -> None:
    calculator = Calculator()
    feed(calculator, [Number(2), Paren.OPEN])
    assert calculator.pending == [Operation(2, Operator.MUL), ParenFrame(implicit_mul=True)]
    feed(calculator, [Number(3), Paren.CLOSE])
    assert calculator.finalize() == 6


def test_group_does_not_fold_past_frame() -> None:
    calculator = Calculator()
    feed(calculator, [Number(2), Operator.MUL, Paren.OPEN, Number(3), Operator.ADD])
    assert calculator.pending == [Operation(2, Operator.MUL), ParenFrame(), Operation(3, Operator.ADD)]


@pytest.mark.parametrize(
    "tokens, expected_error",
    [
        pytest.param([Operator.MUL], NumberExpected),
        pytest.param([Operator.SUB, Operator.DIV], NumberExpected),
        pytest.param([Paren.CLOSE], NumberExpected),
        pytest.param([Number(1), Number(2)], OperationExpected),
        pytest.param([Number(1), Paren.CLOSE], UnmatchedParen),
        pytest.param([Number(1), Operator.DIV, Number(0), Operator.ADD], DivisionByZero),
    ],
)
def test_handle_token_errors(tokens: list[Token], expected_error: type[Exception]) -> None:
    calculator = Calculator()
    with pytest.raises(expected_error):
        feed(calculator, tokens)


@pytest.mark.parametrize(
    "tokens, expected_error",
    [
        pytest.param([], NumberExpected),
        pytest.param([Number(1), Operator.ADD], NumberExpected),
        pytest.param([Operator.SUB], NumberExpected),
        pytest.param([Paren.OPEN, Number(1)], UnmatchedParen),
        pytest.param([Paren.OPEN], UnmatchedParen),
    ],
)
def test_finalize_errors(tokens: list[Token], expected_error: type[Exception]) -> None:
    calculator = Calculator()
    feed(calculator, tokens)
    with pytest.raises(expected_error):
        calculator.finalize()
    assert calculator.state == Empty()
    assert calculator.pending == []


def test_finalize_makes_calculator_reusable() -> None:
    calculator = Calculator()
    feed(calculator, [Number(2), Operator.POW, Number(10)])
    assert calculator.finalize() == 1024
    feed(calculator, [Operator.SUB, Number(7)])
    assert calculator.finalize() == -7


def test_reset_after_error() -> None:
    calculator = Calculator()
    with pytest.raises(OperationExpected):
        feed(calculator, [Paren.OPEN, Number(1), Number(2)])
    calculator.reset()
    feed(calculator, [Number(3)])
    assert calculator.finalize() == 3
