import enum
from typing import Protocol


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


class LocatedError(Protocol):
    position: int | None

    def __str__(self) -> str:
        ...


def format_error(error: LocatedError, code: str) -> str:
    """Error message followed by a window of ``code`` with a caret under the error position"""
    if error.position is None:
        return str(error)
    error_char_idx = min(error.position, len(code))
    print_start_idx = max(0, error_char_idx - 10)
    print_ellipsis_pre = print_start_idx > 0
    print_end_idx = min(len(code), error_char_idx + 10)
    print_ellipsis_post = print_end_idx < len(code)
    return "\n".join(
        [
            str(error),
            (
                ("..." if print_ellipsis_pre else "")
                + f"{code[print_start_idx:print_end_idx]}"
                + ("..." if print_ellipsis_post else "")
            ),
            " " * (error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
        ]
    )
