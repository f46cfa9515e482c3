import logging
import re
from dataclasses import dataclass

from intcalc.utils import PrintableEnum
from intcalc.value import Operator, Value

logger = logging.getLogger(__name__)


@dataclass
class TokenizerError(Exception):
    errmsg: str
    position: int

    def __str__(self) -> str:
        return f"[Tokenizer error] {self.errmsg}"


@dataclass
class InvalidNumber(TokenizerError):
    pass


@dataclass
class UnknownOperation(TokenizerError):
    operation: str


@dataclass(frozen=True)
class Number:
    value: Value

    def __str__(self) -> str:
        return str(self.value)


class Paren(PrintableEnum):
    OPEN = "("
    CLOSE = ")"


Token = Number | Operator | Paren


@dataclass
class Idle:
    pass


@dataclass
class Pending:
    """Single-character token held back until the next character arrives"""

    token: Token


@dataclass
class InNumber:
    value: Value
    radix: int
    digits: int


@dataclass
class InOperator:
    buffer: str
    start: int


TokenizerState = Idle | Pending | InNumber | InOperator


DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

SINGLE_CHAR_TOKENS: dict[str, Token] = {
    "+": Operator.ADD,
    "-": Operator.SUB,
    "(": Paren.OPEN,
    ")": Paren.CLOSE,
}

OPERATOR_TOKENS: dict[str, Token] = {
    "+": Operator.ADD,
    "-": Operator.SUB,
    "/": Operator.DIV,
    "*": Operator.MUL,
    "**": Operator.POW,
    "(": Paren.OPEN,
    ")": Paren.CLOSE,
}


def _is_alphanumeric(char: str) -> bool:
    return char.isascii() and char.isalnum()


def _ends_operator(char: str) -> bool:
    return char.isspace() or _is_alphanumeric(char) or char in SINGLE_CHAR_TOKENS


class Tokenizer:
    """Incremental tokenizer, fed one character at a time.

    Every call to ``update`` returns at most one completed token. Partially read
    numbers and operators are kept in ``state`` between calls, so the caller is free
    to stop after any character and resume later. ``finalize`` flushes whatever is
    buffered and makes the instance ready for the next expression.
    """

    def __init__(self) -> None:
        self.state: TokenizerState = Idle()
        self.position = 0

    def update(self, char: str) -> Token | None:
        token = self._transition(char)
        self.position += 1
        if token is not None:
            logger.debug("Token %s emitted at position %d", token, self.position - 1)
        return token

    def finalize(self) -> Token | None:
        state = self.state
        self.state = Idle()
        try:
            if isinstance(state, Idle):
                return None
            elif isinstance(state, Pending):
                return state.token
            elif isinstance(state, InNumber):
                return self._close_number(state)
            elif isinstance(state, InOperator):
                return self._resolve_operator(state)
            else:
                raise RuntimeError(f"Unexpected tokenizer state: {state}")
        finally:
            self.position = 0

    def _transition(self, char: str) -> Token | None:
        state = self.state
        if isinstance(state, Idle):
            self.state = self._begin_token(char)
            return None
        elif isinstance(state, Pending):
            self.state = self._begin_token(char)
            return state.token
        elif isinstance(state, InNumber):
            if char in ("x", "b") and state.value == 0 and state.radix == 8:
                self.state = InNumber(value=0, radix=16 if char == "x" else 2, digits=0)
                return None
            elif _is_alphanumeric(char):
                digit = DIGITS.index(char.lower())
                if digit >= state.radix:
                    raise InvalidNumber(
                        f"Invalid digit {char!r} in base {state.radix} number", position=self.position
                    )
                self.state = InNumber(
                    value=state.value * state.radix + digit, radix=state.radix, digits=state.digits + 1
                )
                return None
            else:
                token = self._close_number(state)
                self.state = self._begin_token(char)
                return token
        elif isinstance(state, InOperator):
            if _ends_operator(char):
                token = self._resolve_operator(state)
                self.state = self._begin_token(char)
                return token
            else:
                self.state = InOperator(buffer=state.buffer + char, start=state.start)
                return None
        else:
            raise RuntimeError(f"Unexpected tokenizer state: {state}")

    def _begin_token(self, char: str) -> TokenizerState:
        # 0b = binary, 0 = oct, 0x = hex
        if char == "0":
            return InNumber(value=0, radix=8, digits=1)
        elif char in "123456789":
            return InNumber(value=int(char), radix=10, digits=1)
        elif char in SINGLE_CHAR_TOKENS:
            return Pending(SINGLE_CHAR_TOKENS[char])
        elif char.isspace():
            return Idle()
        else:
            return InOperator(buffer=char, start=self.position)

    def _close_number(self, state: InNumber) -> Token:
        if not state.digits:
            raise InvalidNumber(f"No digits after base {state.radix} prefix", position=self.position)
        return Number(state.value)

    def _resolve_operator(self, state: InOperator) -> Token:
        token = OPERATOR_TOKENS.get(state.buffer)
        if token is None:
            raise UnknownOperation(
                f"Unknown operation: {state.buffer!r}", position=state.start, operation=state.buffer
            )
        return token


def tokenize(code: str) -> list[Token]:
    tokenizer = Tokenizer()
    tokens: list[Token] = []
    for char in code:
        token = tokenizer.update(char)
        if token is not None:
            tokens.append(token)
    token = tokenizer.finalize()
    if token is not None:
        tokens.append(token)
    return tokens


def _lexeme(token: Token) -> str:
    if isinstance(token, Number):
        return str(token.value)
    return token.value


def untokenize(tokens: list[Token]) -> str:
    result = " ".join(_lexeme(t) for t in tokens)

    # ( 1 + 2 ) => (1 + 2)
    result = re.sub(r"\(\s+", "(", result)
    result = re.sub(r"\s+\)", ")", result)

    # 4 ** 5 => 4**5
    result = re.sub(r"\s+\*\*\s+", "**", result)
    return result
