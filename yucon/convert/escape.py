"""
Escape sequences in unit tokens.

A unit token takes one of these forms:

    in        plain name, looked up as-is
    _kin      metric prefix ``k`` applied to the unit named ``in``
    :         recall the unit used last time on this side
    _k:       recall the last unit and apply metric prefix ``k``

parse_unit_token runs a small state machine over the token and returns a
UnitToken. The original text is kept on the token untouched so formatters
can rebuild a display name later.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from yucon.convert.errors import NoNameAllowedError, NoNameGivenError, UnknownPrefixError
from yucon.units.prefixes import prefix_value

RECALL_MARKER = ":"
PREFIX_MARKER = "_"


class _State(Enum):
    RESET = auto()
    PREFIX = auto()
    AFTER_PREFIX = auto()
    RECALL = auto()


@dataclass(frozen=True)
class UnitToken:
    """Parsed form of one unit argument.

    Attributes:
        text: The token exactly as the user typed it.
        name: Unit name to look up; None when the unit is recalled.
        multiplier: Metric prefix multiplier, 1.0 without a prefix.
        prefix: The prefix letter as typed, or None.
    """

    text: str
    name: str | None = None
    multiplier: float = 1.0
    prefix: str | None = None

    @property
    def recall(self) -> bool:
        return self.name is None


def parse_unit_token(text: str) -> UnitToken:
    """
    Interpret the escape syntax of a unit token.

    Raises
    ------
    UnknownPrefixError
        ``_`` is followed by a character that is not an SI prefix letter, or by nothing.
    NoNameGivenError
        A valid prefix is followed by nothing.
    NoNameAllowedError
        Characters follow the recall marker ``:``.
    """
    state = _State.RESET
    multiplier = 1.0
    prefix: str | None = None
    pos = 0

    while True:
        ch = text[pos] if pos < len(text) else ""

        match state:
            case _State.RESET:
                if ch == RECALL_MARKER:
                    state = _State.RECALL
                elif ch == PREFIX_MARKER:
                    state = _State.PREFIX
                else:
                    return UnitToken(text=text, name=text)
            case _State.PREFIX:
                value = prefix_value(ch)
                if value is None:
                    raise UnknownPrefixError(text)
                multiplier, prefix = value, ch
                state = _State.AFTER_PREFIX
            case _State.AFTER_PREFIX:
                if ch == RECALL_MARKER:
                    state = _State.RECALL
                elif ch == "":
                    raise NoNameGivenError(text)
                else:
                    return UnitToken(text=text, name=text[pos:], multiplier=multiplier, prefix=prefix)
            case _State.RECALL:
                if ch != "":
                    raise NoNameAllowedError(text)
                return UnitToken(text=text, multiplier=multiplier, prefix=prefix)

        pos += 1
