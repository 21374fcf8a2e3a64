"""
File: ./forwarded/logger/_console_formatter.py
Author: Vítor Vasconcellos (vasconcellos.dev@gmail.com)
Project: forwarded

Copyright © 2021-2021 Vítor Vasconcellos
This program is free software; you can redistribute it and/or modify it under the terms of the GNU General Public License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later version.
This program is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with this program; if not, write to the Free Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301, USA.
"""

# Internal
import os
import sys
from typing import Dict, Literal, Optional
from logging import INFO, DEBUG, ERROR, WARNING, CRITICAL, Formatter, LogRecord


def _stderr_supports_color() -> bool:
    if "NO_COLOR" in os.environ:
        return False

    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


class ConsoleFormatter(Formatter):
    """Human readable records for stderr, colored by level when the terminal supports it"""

    DEFAULT_FORMAT = "%(color)s[%(name)s]-[%(levelname)s]-[%(asctime)s]%(end_color)s %(message)s"
    DEFAULT_COLORS = {
        DEBUG: 4,  # Blue
        INFO: 2,  # Green
        WARNING: 3,  # Yellow
        ERROR: 1,  # Red
        CRITICAL: 5,  # Magenta
    }
    DEFAULT_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

    def __init__(
        self,
        fmt: str = DEFAULT_FORMAT,
        datefmt: str = DEFAULT_DATE_FORMAT,
        style: Literal["%", "{", "$"] = "%",
        colors: Optional[Dict[int, int]] = DEFAULT_COLORS,
    ) -> None:
        super().__init__(fmt, datefmt, style)

        if colors is None or not _stderr_supports_color():
            self._colors: Dict[int, str] = {}
            self._normal = ""
        else:
            self._colors = {levelno: f"\033[2;3{code}m" for levelno, code in colors.items()}
            self._normal = "\033[0m"

    def formatMessage(self, record: LogRecord) -> str:
        color = self._colors.get(record.levelno, "")
        record.color = color
        record.end_color = self._normal if color else ""
        return super().formatMessage(record)

    def format(self, record: LogRecord) -> str:
        # Indent continuation lines (tracebacks, multi-line messages) under the record header
        return super().format(record).replace("\n", "\n    ")


__all__ = ("ConsoleFormatter",)
