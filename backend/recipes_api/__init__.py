"""Expose the application factory at package level.

``from recipes_api import create_app`` without traversing the package.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
