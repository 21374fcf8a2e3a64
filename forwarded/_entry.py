"""
File: ./forwarded/_entry.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: forwarded

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
from typing import Union
from ipaddress import IPv4Address, IPv6Address
from dataclasses import dataclass

# https://www.rfc-editor.org/rfc/rfc7239#section-6.2
UNKNOWN = "unknown"


@dataclass(frozen=True)
class Address:
    """Hop identified by an IP literal. The port, when the proxy sent one, is not retained"""

    ip: Union[IPv4Address, IPv6Address]

    @property
    def has_address(self) -> bool:
        return True

    @property
    def has_name(self) -> bool:
        return False

    @property
    def is_unknown(self) -> bool:
        return False

    def __str__(self) -> str:
        return str(self.ip)


@dataclass(frozen=True)
class Name:
    """Hop identified by an opaque token, either an obfuscated identifier or a hostname-like value

    Links:
        https://www.rfc-editor.org/rfc/rfc7239#section-6.3

    """

    value: str

    @property
    def has_address(self) -> bool:
        return False

    @property
    def has_name(self) -> bool:
        return True

    @property
    def is_unknown(self) -> bool:
        """Proxy intentionally withheld the identity of this hop"""
        return self.value.lower() == UNKNOWN

    def __str__(self) -> str:
        return self.value


HopEntry = Union[Address, Name]

__all__ = ("UNKNOWN", "Address", "Name", "HopEntry")
