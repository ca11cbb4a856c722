"""``shon`` command: print SHON arguments as JSON.

    $ shon [ --name foo --tags [ a b ] ]
    {
      "name": "foo",
      "tags": [
        "a",
        "b"
      ]
    }
"""

from __future__ import annotations

import sys
from typing import IO, Sequence

from .api import parse
from .errors import ShonError
from .render import to_json


def run(stdout: IO[str], args: Sequence[str]) -> None:
    """Decode *args* and write them to *stdout* as indented JSON."""
    value = parse(args)
    stdout.write(to_json(value))
    stdout.write("\n")


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``shon`` console script."""
    args = sys.argv[1:] if argv is None else argv
    try:
        run(sys.stdout, args)
    except ShonError as exc:
        print(f"shon: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
