"""
Common utilities shared across routers.
"""

from .scope import get_now, resolve_scope, scope_output

__all__ = [
    "get_now",
    "resolve_scope",
    "scope_output",
]
