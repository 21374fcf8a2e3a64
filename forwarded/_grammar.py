"""
File: ./forwarded/_grammar.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: forwarded

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
import string
from typing import Tuple, Literal, Callable, Iterator, Optional, FrozenSet, NamedTuple

CaptureKind = Literal["ipv4", "ipv6", "name"]

# Sub-matchers receive the text and the cursor position, answering the captured value and the
# position right after the matched value, or None when the value doesn't fit its alternative
SubMatcher = Callable[[str, int], Optional[Tuple[str, int]]]

_KEY = "for="
_QUOTE = '"'
_DIGITS = frozenset(string.digits)
_HEX_OR_COLON = frozenset(string.hexdigits + ":")
_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_NOT_IN_QUOTED_NAME = frozenset('"[]:')
_TERMINATORS = frozenset(",;")
# str.lower may change the length of some non ASCII strings, which would misalign positions
_ASCII_LOWERCASE = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _span(text: str, pos: int, accept: FrozenSet[str]) -> int:
    """Position after the longest run of accepted characters starting at pos"""
    end = len(text)
    while pos < end and text[pos] in accept:
        pos += 1
    return pos


def _span_excluding(text: str, pos: int, reject: FrozenSet[str]) -> int:
    end = len(text)
    while pos < end and text[pos] not in reject:
        pos += 1
    return pos


def _skip_port(text: str, pos: int) -> int:
    # Port digits are only consumed, never kept
    if text.startswith(":", pos):
        end = _span(text, pos + 1, _DIGITS)
        if end > pos + 1:
            return end
    return pos


def _dotted_quad(text: str, pos: int) -> Optional[int]:
    # Shape only, octet range is left for the IP literal validation
    for octet in range(4):
        if octet > 0:
            if not text.startswith(".", pos):
                return None
            pos += 1

        end = _span(text, pos, _DIGITS)
        if not 0 < end - pos <= 3:
            return None
        pos = end

    return pos


# "[2001:db8:cafe::17]" or "[2001:db8:cafe::17]:4711"
def quoted_ipv6(text: str, pos: int) -> Optional[Tuple[str, int]]:
    if not text.startswith('"[', pos):
        return None

    start = pos + 2
    end = _span(text, start, _HEX_OR_COLON)
    if end == start or not text.startswith("]", end):
        return None

    close = _skip_port(text, end + 1)
    if not text.startswith(_QUOTE, close):
        return None

    return text[start:end], close + 1


# "192.0.2.60" or "192.0.2.60:5412"
def quoted_ipv4(text: str, pos: int) -> Optional[Tuple[str, int]]:
    if not text.startswith(_QUOTE, pos):
        return None

    start = pos + 1
    end = _dotted_quad(text, start)
    if end is None:
        return None

    close = _skip_port(text, end)
    if not text.startswith(_QUOTE, close):
        return None

    return text[start:end], close + 1


def quoted_name(text: str, pos: int) -> Optional[Tuple[str, int]]:
    if not text.startswith(_QUOTE, pos):
        return None

    start = pos + 1
    end = _span_excluding(text, start, _NOT_IN_QUOTED_NAME)
    if not text.startswith(_QUOTE, end):
        return None

    return text[start:end], end + 1


def bare_ipv4(text: str, pos: int) -> Optional[Tuple[str, int]]:
    end = _dotted_quad(text, pos)
    return None if end is None else (text[pos:end], end)


def bare_name(text: str, pos: int) -> Optional[Tuple[str, int]]:
    end = _span(text, pos, _TOKEN_CHARS)
    return None if end == pos else (text[pos:end], end)


class Alternative(NamedTuple):
    kind: CaptureKind
    match: SubMatcher


class Capture(NamedTuple):
    kind: CaptureKind
    value: str
    start: int
    """Position of the for= key that introduced this capture"""
    end: int
    """Position after the step terminator, where scanning resumes"""


class Grammar(NamedTuple):
    """Ordered set of alternatives for the value of a for= step

    Alternatives are tried in order, the first one whose value is followed by the end of the text
    or by a step/parameter terminator (`,` or `;`) wins. Every sub-matcher is greedy and never
    backtracks, so a full scan is linear on the length of the text.

    """

    key: str
    alternatives: Tuple[Alternative, ...]

    def match_value(self, text: str, pos: int) -> Optional[Tuple[CaptureKind, str, int]]:
        for alternative in self.alternatives:
            matched = alternative.match(text, pos)
            if matched is None:
                continue

            value, end = matched
            if end == len(text):
                return alternative.kind, value, end
            if text[end] in _TERMINATORS:
                return alternative.kind, value, end + 1

        return None

    def scan(self, text: str) -> Iterator[Capture]:
        """Find all non-overlapping for= steps in a header value, from left to right

        Args:
            text: Value of a single Forwarded header

        Yields:
            Captured values, in order of appearance

        """
        folded = text.translate(_ASCII_LOWERCASE)
        pos = folded.find(self.key)
        while pos >= 0:
            matched = self.match_value(text, pos + len(self.key))
            if matched is None:
                pos = folded.find(self.key, pos + 1)
                continue

            kind, value, end = matched
            yield Capture(kind, value, pos, end)
            pos = folded.find(self.key, end)


# https://www.rfc-editor.org/rfc/rfc7239#section-6
FOR_GRAMMAR = Grammar(
    _KEY,
    (
        Alternative("ipv6", quoted_ipv6),
        Alternative("ipv4", quoted_ipv4),
        Alternative("name", quoted_name),
        Alternative("ipv4", bare_ipv4),
        Alternative("name", bare_name),
    ),
)

__all__ = (
    "FOR_GRAMMAR",
    "Grammar",
    "Capture",
    "Alternative",
    "CaptureKind",
    "quoted_ipv6",
    "quoted_ipv4",
    "quoted_name",
    "bare_ipv4",
    "bare_name",
)
