"""ShonRepl — try SHON from a prompt string.

``shon2json`` is the embeddable entry point: it never raises for bad
input and reports errors in its result instead. ``main()`` provides the
``shon-repl`` console script.
"""

from __future__ import annotations

import shlex
import sys
from typing import IO, Any

import orjson

from .api import parse, parse_object
from .errors import ShonError
from .options import Options
from .render import to_json


def shon2json(
    prompt: str,
    *,
    implicit_object: bool = False,
    options: Options | None = None,
) -> dict[str, str]:
    """Shell-split *prompt*, decode it, and return ``{"json": text}``.

    On failure returns ``{"error": message}`` instead.
    """
    try:
        args = shlex.split(prompt)
    except ValueError as exc:
        return {"error": f"split shell: {exc}"}

    decode = parse_object if implicit_object else parse
    try:
        value: Any = decode(args, Any, options)
    except ShonError as exc:
        return {"error": f"parse SHON: {exc}"}

    try:
        text = to_json(value)
    except orjson.JSONEncodeError as exc:
        return {"error": f"marshal JSON: {exc}"}
    return {"json": text}


# ---------------------------------------------------------------------------
# ShonRepl class (notebook / programmatic use)
# ---------------------------------------------------------------------------

class ShonRepl:
    """Converts prompt lines to JSON, remembering the input mode.

    Usage::

        repl = ShonRepl()
        repl.eval("[ --name foo ]")     # → {"json": '{\\n  "name": "foo"\\n}'}
        repl.implicit_object = True
        repl.eval("--name foo")         # same result
    """

    def __init__(self, implicit_object: bool = False, options: Options | None = None) -> None:
        self.implicit_object = implicit_object
        self.options = options

    @property
    def mode(self) -> str:
        return "object" if self.implicit_object else "value"

    def eval(self, prompt: str) -> dict[str, str]:
        return shon2json(prompt, implicit_object=self.implicit_object, options=self.options)


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _print_result(result: dict[str, str], dest: IO[str]) -> None:
    if "error" in result:
        print(f"error: {result['error']}", file=dest)
    else:
        print(result["json"], file=dest)


def _process_line(repl: ShonRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line:
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    # ── Mode commands ─────────────────────────────────────────────────────
    if line == ":object":
        repl.implicit_object = True
        return True

    if line == ":value":
        repl.implicit_object = False
        return True

    if line == ":mode":
        print(f"  {repl.mode}", file=dest)
        return True

    # ── SHON input ────────────────────────────────────────────────────────
    _print_result(repl.eval(line), dest)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main() -> None:
    """Interactive SHON shell (``shon-repl`` / ``python -m shon.repl``)."""
    repl = ShonRepl()
    dest: IO[str] = sys.stdout

    print("SHON REPL  (:q to quit  |  :object  :value  :mode)")

    while True:
        try:
            line = input("SHON> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not _process_line(repl, line, dest):
            break


if __name__ == "__main__":
    main()
