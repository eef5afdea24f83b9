"""
Render Template Use Case

Architectural Intent:
- Produces a rendered scratch copy of a template artifact
- The template itself is never written to
- Caller owns the returned scratch file and removes it after deployment
"""

import logging
from pathlib import Path
from typing import Mapping, Optional
from hostsync.domain.ports.filesystem_port import FilesystemPort
from hostsync.domain.services.template_renderer import (
    render_placeholders,
    unresolved_placeholders,
)

logger = logging.getLogger(__name__)


class RenderTemplate:
    def __init__(self, filesystem: FilesystemPort):
        self.filesystem = filesystem

    def execute(
        self, template_path: Path, substitutions: Mapping[str, Optional[str]]
    ) -> Path:
        scratch = self.filesystem.scratch_copy(template_path)
        try:
            content = self.filesystem.read_bytes(scratch)
            rendered = render_placeholders(content, substitutions)
            if rendered != content:
                self.filesystem.write_bytes(scratch, rendered)
        except OSError:
            self.filesystem.remove_file(scratch)
            raise

        leftover = unresolved_placeholders(rendered, substitutions)
        if leftover:
            logger.warning(
                "Unresolved placeholders in %s: %s", template_path, ", ".join(leftover)
            )
        return scratch
