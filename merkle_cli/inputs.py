"""
CLI Input Helpers

Reading element lists and proof files from disk.
"""

from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path
from typing import Any


class InputError(Exception):
    """Raised when a CLI input file is missing or unreadable."""


def read_elements_file(path: Path) -> list[str]:
    """
    Read elements from a file.

    .json files must hold a JSON array of strings. Any other file is read
    as text with one element per line; a single trailing newline is ignored
    and blank lines are kept as empty elements.

    Raises:
        InputError: If the file is missing or not in either format
    """
    if not path.exists():
        raise InputError(f"Elements file not found: {path}")

    text = path.read_text(encoding="utf-8")

    if path.suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InputError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(data, list) or not all(isinstance(e, str) for e in data):
            raise InputError(f"{path} must contain a JSON array of strings")
        return data

    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n") if text else []


def load_elements(args: Namespace) -> list[str]:
    """Elements from --elements-file if given, else the positional arguments."""
    if getattr(args, "elements_file", None):
        return read_elements_file(Path(args.elements_file))
    return list(getattr(args, "elements", None) or [])


def read_json_file(path: Path) -> dict[str, Any]:
    """
    Read a JSON object from path.

    Raises:
        InputError: If the file is missing, invalid JSON or not an object
    """
    if not path.exists():
        raise InputError(f"File not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise InputError(f"{path} must contain a JSON object")
    return data


def write_output(text: str, out: str | None) -> None:
    """Write text to the --out path, or print it to stdout."""
    if out:
        Path(out).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
