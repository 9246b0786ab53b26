"""Utilities for reading markup and writing DOT / JSON output."""

import sys
from pathlib import Path
from typing import Optional
from erdot.ir.document import Document

STDIO = "-"


def read_markup(path: Optional[Path] = None) -> str:
    """
    Read markup from a file, or from stdin when ``path`` is None or "-".

    Args:
        path: Path to the markup file

    Returns:
        Markup text

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    if path is None or str(path) == STDIO:
        return sys.stdin.read()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Markup file not found: {path}")
    return path.read_text(encoding="utf-8")


def write_output(text: str, path: Optional[Path] = None) -> None:
    """
    Write text to a file, or to stdout when ``path`` is None or "-".

    Note:
        Creates parent directories if they don't exist.
    """
    if path is None or str(path) == STDIO:
        sys.stdout.write(text)
        return

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def save_document_json(document: Document, path: Optional[Path] = None) -> None:
    """
    Save a parsed Document as JSON.

    Args:
        document: Document instance to save
        path: Where to save the JSON file (stdout when None or "-")
    """
    write_output(document.model_dump_json(indent=2) + "\n", path)
