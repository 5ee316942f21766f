"""
HTTP surface exposing the registries and the conductor.
"""

from .app import create_app

__all__ = ["create_app"]
