from intcalc.calculator import Calculator, CalculatorError
from intcalc.tokenizer import Token, Tokenizer
from intcalc.value import Value


def evaluate(code: str) -> Value:
    """Feeds ``code`` character by character through a fresh tokenizer and calculator.

    The first error aborts the evaluation. Calculator errors are tagged with the
    position of the character that completed the offending token.
    """
    tokenizer = Tokenizer()
    calculator = Calculator()
    for char in code:
        position = tokenizer.position
        token = tokenizer.update(char)
        if token is not None:
            _handle_token(calculator, token, position)

    end_position = len(code)
    token = tokenizer.finalize()
    if token is not None:
        _handle_token(calculator, token, end_position)
    try:
        return calculator.finalize()
    except CalculatorError as e:
        e.position = end_position
        raise


def _handle_token(calculator: Calculator, token: Token, position: int) -> None:
    try:
        calculator.handle_token(token)
    except CalculatorError as e:
        e.position = position
        raise
