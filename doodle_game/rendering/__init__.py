"""Rendering helpers for the drawing surface."""

from .surface import DrawingSurface

__all__ = ["DrawingSurface"]
