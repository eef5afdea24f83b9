"""
Managed Component Module

Architectural Intent:
- A version-controlled working copy whose revision is pinned per run
- Prior revision is captured once, before the first mutation on the path
- Current revision is re-read after pin enforcement
"""

from __future__ import annotations
from pathlib import Path
from typing import Optional
from hostsync.domain.value_objects.revision import Revision


class ManagedComponent:
    __slots__ = (
        "_name",
        "_path",
        "_desired_pin",
        "_prior_revision",
        "_prior_captured",
        "_current_revision",
    )

    def __init__(
        self,
        name: str,
        path: Path,
        desired_pin: Optional[Revision] = None,
    ):
        if not name:
            raise ValueError("Component name cannot be empty")
        self._name = name
        self._path = Path(path)
        self._desired_pin = desired_pin
        self._prior_revision: Optional[Revision] = None
        self._prior_captured = False
        self._current_revision: Optional[Revision] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def desired_pin(self) -> Optional[Revision]:
        return self._desired_pin

    @property
    def is_managed(self) -> bool:
        return self._desired_pin is not None

    @property
    def prior_revision(self) -> Optional[Revision]:
        return self._prior_revision

    @property
    def prior_captured(self) -> bool:
        return self._prior_captured

    @property
    def current_revision(self) -> Optional[Revision]:
        return self._current_revision

    def capture_prior(self, revision: Optional[Revision]) -> bool:
        """Record the pre-run revision. Later calls are ignored."""
        if self._prior_captured:
            return False
        self._prior_revision = revision
        self._prior_captured = True
        return True

    def observe(self, revision: Optional[Revision]) -> None:
        self._current_revision = revision

    def __repr__(self) -> str:
        return (
            f"ManagedComponent(name={self._name}, path={self._path}, "
            f"desired_pin={self._desired_pin}, prior={self._prior_revision}, "
            f"current={self._current_revision})"
        )
