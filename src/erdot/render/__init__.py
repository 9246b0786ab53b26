"""DOT rendering."""

from .dot import CARDINALITY_ARROWS, render_dot

__all__ = ["CARDINALITY_ARROWS", "render_dot"]
