"""
File: ./forwarded/__main__.py
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
import shlex
from typing import Any, Dict, List, NoReturn, Optional, Sequence
from logging import INFO, WARN, DEBUG
from argparse import ArgumentError

# External
import orjson
from tap import Tap

from forwarded import Address, HopEntry, ForwardedHeader, __summary__, __version__
from forwarded.logger import get_logger, setup_logging

_TRUTHY = ("1", "on", "yes", "true")

logger = get_logger("forwarded.cli")


def _serialize(index: int, entry: HopEntry) -> Dict[str, Any]:
    if isinstance(entry, Address):
        return {"index": index, "address": str(entry.ip)}
    return {"index": index, "name": entry.value, "unknown": entry.is_unknown}


class ArgumentParser(Tap):
    headers: List[str] = []
    """Forwarded header values, one per occurrence. Read one per line from stdin if omitted"""
    verbose: int = 0  # Verbosity level, Maximum is -vv
    client: bool = False  # Only print the originating client, the first hop of the chain
    strict: bool = False  # Exit with an error status when no hop is found

    def configure(self) -> None:
        # Load flags from environment variables
        environ_config = []
        for variable in self.class_variables:
            value = os.environ.get(f"FORWARDED_{variable.upper()}", "")
            if not value or variable == "headers":
                continue

            option = f"--{variable.replace('_', '-') if self._underscores_to_dashes else variable}"
            if isinstance(getattr(type(self), variable, None), bool):
                if value.lower() in _TRUTHY:
                    environ_config.append(option)
            elif variable == "verbose" and value.isdigit():
                environ_config.extend([option] * int(value))

        if len(environ_config) > 0:
            self.args_from_configs.insert(0, " ".join(environ_config))

        # More advanced argparse configurations
        self.add_argument("headers", nargs="*")
        self.add_argument("--verbose", "-v", action="count")
        self.add_argument("--version", action="version", version=f"%(prog)s {__version__}")


def main(raw_args: Optional[Sequence[str]] = None) -> NoReturn:
    arg_parser = ArgumentParser(underscores_to_dashes=True, description=__summary__)

    # Workaround TAP using simple split instead of shlex.split in args_from_configs
    raw_args = [
        *(
            arg
            for args_from_config in arg_parser.args_from_configs
            for arg in shlex.split(args_from_config)
        ),
        *(sys.argv[1:] if raw_args is None else raw_args),
    ]
    arg_parser.args_from_configs = []

    try:
        args = arg_parser.parse_args(raw_args)
    except ArgumentError as exc:
        print(exc.message, file=sys.stderr)
        arg_parser.print_usage()
        sys.exit(1)

    verbose = args.verbose or 0
    setup_logging(DEBUG if verbose >= 2 else (INFO if verbose == 1 else WARN))

    if args.headers:
        values = list(args.headers)
    else:
        values = [line.rstrip("\r\n") for line in sys.stdin if line.strip()]

    logger.info("Parsing %d Forwarded header value(s)", len(values))

    forwarded = ForwardedHeader.parse(values)
    entries = forwarded.for_[:1] if args.client else forwarded.for_

    try:
        for index, entry in enumerate(entries):
            print(orjson.dumps(_serialize(index, entry)).decode("utf-8"))
        sys.stdout.flush()
    except BrokenPipeError:
        # https://docs.python.org/3/library/signal.html#note-on-sigpipe
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(1)

    if args.strict and not entries:
        logger.warning("No valid for= hop found in %d header value(s)", len(values))
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
