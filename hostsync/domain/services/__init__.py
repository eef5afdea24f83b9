"""
Domain Services Package

Architectural Intent:
- Pure logic with no I/O
"""

from hostsync.domain.services.template_renderer import (
    render_placeholders,
    unresolved_placeholders,
)

__all__ = [
    "render_placeholders",
    "unresolved_placeholders",
]
