"""Utility functions for common operations."""

from .io import read_markup, write_output, save_document_json

__all__ = [
    "read_markup",
    "write_output",
    "save_document_json",
]
