"""
Template Rendering Service

Architectural Intent:
- Pure placeholder substitution over opaque bytes
- Literal matching only, no patterns or escaping
- Placeholders whose value is empty are left in place so the gap stays visible

Design Decisions:
- Substitutions are applied one placeholder at a time, in mapping order
- bytes.replace gives non-overlapping, left-to-right replacement
"""

from __future__ import annotations
from typing import Mapping, Optional


def render_placeholders(
    content: bytes,
    substitutions: Mapping[str, Optional[str]],
    encoding: str = "utf-8",
) -> bytes:
    rendered = content
    for placeholder, value in substitutions.items():
        if not placeholder or not value:
            continue
        rendered = rendered.replace(placeholder.encode(encoding), value.encode(encoding))
    return rendered


def unresolved_placeholders(
    content: bytes,
    substitutions: Mapping[str, Optional[str]],
    encoding: str = "utf-8",
) -> list[str]:
    """Placeholders from the mapping that still appear in the content."""
    return [
        placeholder
        for placeholder in substitutions
        if placeholder and placeholder.encode(encoding) in content
    ]
