"""
File: ./forwarded/_header.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: forwarded

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
from typing import Any, List, Tuple, Union, Mapping, Iterable, Iterator, Optional, Sequence
from ipaddress import IPv4Address, IPv6Address

# Project
from .logger import get_logger
from ._entry import Name, Address, HopEntry
from ._grammar import FOR_GRAMMAR, Capture

logger = get_logger(__name__)

HEADER_NAME = "Forwarded"

HEADER_VALUE_TYPE = Union[str, bytes]


class InvalidArgumentError(TypeError):
    """Input is absent or isn't made of header values"""


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        # Same mapping http.client uses when decoding header lines
        return value.decode("latin-1")
    raise InvalidArgumentError(f"Header value must be str or bytes, not {type(value).__name__}")


def _to_entry(capture: Capture) -> Optional[HopEntry]:
    if capture.kind == "name":
        return Name(capture.value)

    try:
        ip: Union[IPv4Address, IPv6Address] = (
            IPv6Address(capture.value) if capture.kind == "ipv6" else IPv4Address(capture.value)
        )
    except ValueError as exc:
        logger.debug(
            "Discarding for=%s at position %d: %s",
            capture.value,
            capture.start,
            exc,
            extra={"capture": capture._asdict()},
        )
        return None

    return Address(ip)


class ForwardedHeader(Sequence[HopEntry]):
    """Helper for the Forwarded header, as defined in RFC 7239

    Only the for= parameter is supported. Entries are read-only, ordered by header occurrence and
    then by appearance within each header value.

    Links:
        https://www.rfc-editor.org/rfc/rfc7239

    """

    __slots__ = ("_for",)

    def __init__(self, entries: Iterable[HopEntry] = ()) -> None:
        self._for: Tuple[HopEntry, ...] = tuple(entries)

    @property
    def for_(self) -> Tuple[HopEntry, ...]:
        return self._for

    @property
    def client(self) -> Optional[HopEntry]:
        """Originating client, the first hop of the chain, if any"""
        return self._for[0] if self._for else None

    def __getitem__(self, index: Any) -> Any:
        return self._for[index]

    def __len__(self) -> int:
        return len(self._for)

    def __iter__(self) -> Iterator[HopEntry]:
        return iter(self._for)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ForwardedHeader):
            return NotImplemented
        return self._for == other._for

    def __hash__(self) -> int:
        return hash(self._for)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._for)!r})"

    @classmethod
    def parse(
        cls, headers: Union[HEADER_VALUE_TYPE, Iterable[HEADER_VALUE_TYPE]]
    ) -> "ForwardedHeader":
        """Parse a sequence of Forwarded header values

        Malformed for= steps, and addresses that aren't valid IP literals, are skipped.

        Args:
            headers: Header values, in order of occurrence. May be empty, can't be None.

        Raises:
            InvalidArgumentError: headers is None, or contains something other than str/bytes

        Returns:
            Parsed Forwarded header

        """
        if headers is None:
            raise InvalidArgumentError("headers can't be None")

        if isinstance(headers, (str, bytes)):
            headers = (headers,)

        try:
            iterator = iter(headers)
        except TypeError as exc:
            raise InvalidArgumentError("headers must be an iterable of header values") from exc

        # Every value is checked up front, a bad one never leaves a partial result
        values = [_as_text(value) for value in iterator]

        return cls(
            entry
            for value in values
            for entry in map(_to_entry, FOR_GRAMMAR.scan(value))
            if entry is not None
        )

    @classmethod
    def load(cls, headers: Any) -> "ForwardedHeader":
        """Parse every Forwarded header present in a header container

        Args:
            headers: http.client.HTTPMessage (as in BaseHTTPRequestHandler.headers), any object
                with an email.message.Message like get_all, or a mapping of header names to a
                value or list of values

        Raises:
            InvalidArgumentError: headers is None or an unsupported container

        Returns:
            Parsed Forwarded header, empty if the header isn't present

        """
        if headers is None:
            raise InvalidArgumentError("headers can't be None")

        get_all = getattr(headers, "get_all", None)
        if callable(get_all):
            values = get_all(HEADER_NAME, None) or []
        elif isinstance(headers, Mapping):
            values = []
            for name, value in headers.items():
                if str(name).lower() != HEADER_NAME.lower():
                    continue
                if isinstance(value, (str, bytes)):
                    values.append(value)
                else:
                    try:
                        values.extend(value)
                    except TypeError as exc:
                        raise InvalidArgumentError(
                            f"Unsupported value for {name}: {type(value).__name__}"
                        ) from exc
        else:
            raise InvalidArgumentError(f"Unsupported header container: {type(headers).__name__}")

        return cls.parse(values)


def parse_header_forwarded_for(header: str) -> List[Union[str, IPv4Address, IPv6Address]]:
    """Parse forwarded element for

    Args:
        header: Value for the Forwarded Header

    Links:
        https://www.rfc-editor.org/rfc/rfc7239#section-4

    Returns:
        List of ips and names defined in forwarded element for

    """
    return [
        entry.ip if isinstance(entry, Address) else entry.value
        for entry in ForwardedHeader.parse((header,))
    ]


__all__ = (
    "HEADER_NAME",
    "ForwardedHeader",
    "InvalidArgumentError",
    "parse_header_forwarded_for",
)
