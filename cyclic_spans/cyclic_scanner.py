"""Longest balanced bracket span of a cyclically repeated string.

The input string is read as if it repeated forever.  A span is valid when its
bracket characters ``()[]{}`` are balanced and properly nested; every other
character is filler that may appear anywhere inside a span.  The scanner walks
the repeated string once, tracking pending opening brackets on a stack, and
reports either the longest finite span it found or ``"Infinite"`` when the
repetition lets a valid span grow without limit.

The public API covers the following capabilities:

* ``find_balanced_span`` – run the scan and return a :class:`BalancedSpan`
  record with the unwrapped end index, length and reconstructed value.
* ``longest_balanced_span`` – convenience wrapper returning only the text.
* ``NonByteCharError`` – raised when a character needs more than one byte.

Time complexity is O(n) and the pending stack never holds more than ``n``
entries.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import List, Optional

from .brackets import is_bracket, is_single_byte, opening_to_closing

logger = logging.getLogger(__name__)

INFINITE = "Infinite"


class NonByteCharError(ValueError):
    """Raised when the input contains a character wider than one byte."""

    code = "NonByteChar"

    def __init__(self, char: str, position: int) -> None:
        super().__init__(
            f"character {char!r} at position {position} is not single-byte encodable"
        )
        self.char = char
        self.position = position


@dataclass(frozen=True, slots=True)
class PendingOpen:
    """An opening bracket still waiting for *closer* since unwrapped *index*."""

    closer: str
    index: int


@dataclass(frozen=True)
class BalancedSpan:
    """Best span identified in the cyclic reading of *text*.

    Attributes
    ----------
    text:
        Original (single lap) string.
    end:
        Exclusive end of the span in unwrapped index space.  Values above
        ``len(text)`` mean the span crosses the point where *text* repeats.
    length:
        Number of characters in the span.
    infinite:
        ``True`` when the repetition sustains an unbounded valid span.
    """

    text: str
    end: int
    length: int
    infinite: bool = False

    @property
    def start(self) -> int:
        """Inclusive start of the span in unwrapped index space."""

        return self.end - self.length

    @property
    def wraps(self) -> bool:
        """Return ``True`` when the span straddles the repetition boundary."""

        return not self.infinite and self.end > len(self.text)

    @property
    def value(self) -> str:
        """Return the span text, or ``"Infinite"`` for unbounded spans."""

        if self.infinite:
            return INFINITE
        size = len(self.text)
        if self.end > size:
            return self.text[self.start : size] + self.text[: self.end - size]
        return self.text[self.start : self.end]


def find_balanced_span(text: str) -> BalancedSpan:
    """Scan the cyclic extension of *text* for its longest balanced span.

    Parameters
    ----------
    text:
        Input string.  Every character must be single-byte encodable; the
        check happens while scanning so the error reports the first offending
        character reached.

    Raises
    ------
    TypeError
        If *text* is not a string.
    NonByteCharError
        If a character requires more than one byte to encode.

    Returns
    -------
    BalancedSpan
        Record describing the best span.  ``infinite`` is set when a valid
        span at least as long as *text* exists.
    """

    if not isinstance(text, str):
        raise TypeError("text must be a string")

    size = len(text)
    stack: List[PendingOpen] = []
    max_len = 0
    max_end = 0
    prev_valid_len = 0

    for index in range(2 * size):
        char = text[index % size]
        if not is_single_byte(char):
            raise NonByteCharError(char, index % size)

        candidate: Optional[int] = None
        closer = opening_to_closing(char)
        if closer is not None:
            if len(stack) >= size:
                logger.debug(
                    "Stopping at index %d: %d pending opens fill the stack", index, len(stack)
                )
                break
            if stack and index - stack[0].index >= size:
                logger.debug(
                    "Stopping at index %d: open from index %d pending for a full lap",
                    index,
                    stack[0].index,
                )
                break
            stack.append(PendingOpen(closer=closer, index=index))
        elif is_bracket(char):
            last = stack.pop() if stack else None
            if last is None or last.closer != char:
                # A mismatch invalidates every pending open.
                prev_valid_len = 0
                stack.clear()
                if index >= size:
                    logger.debug("Stopping at index %d after a mismatch past one lap", index)
                    break
            elif stack:
                candidate = index - stack[-1].index
            else:
                candidate = 1 + index - last.index + prev_valid_len
        elif stack:
            candidate = index - stack[-1].index
        else:
            candidate = prev_valid_len + 1

        if candidate is None:
            continue

        if candidate > max_len:
            if candidate >= size:
                logger.debug("Span of %d characters covers a full lap at index %d", candidate, index)
                return BalancedSpan(text=text, end=index + 1, length=candidate, infinite=True)
            max_len = candidate
            max_end = index + 1

        if not stack:
            prev_valid_len = candidate

    return BalancedSpan(text=text, end=max_end, length=max_len)


def longest_balanced_span(text: str) -> str:
    """Return the longest balanced span of cyclic *text* or ``"Infinite"``."""

    return find_balanced_span(text).value


__all__ = [
    "INFINITE",
    "BalancedSpan",
    "NonByteCharError",
    "PendingOpen",
    "find_balanced_span",
    "longest_balanced_span",
]
