"""
Desired State Loader

Architectural Intent:
- Parses the desired-state document into the DesiredState entity
- Resolves the host data directory and every path to an absolute one
- All validation happens here, before anything on the host is touched

Design Decisions:
- YAML for .yaml/.yml files, JSON for anything else
- Every component pin is also exposed as a _<NAME>_PINNED_VERSION_ placeholder;
  explicit substitutions win
- Artifact sources must exist; bulk asset sources are optional
"""

from __future__ import annotations
import json
import logging
import re
from pathlib import Path
from typing import Any, Optional
import yaml
from hostsync.domain.entities.config_artifact import (
    BulkAssetDirectory,
    ConfigArtifact,
    ServiceAllowlist,
)
from hostsync.domain.entities.desired_state import DesiredState
from hostsync.domain.entities.managed_component import ManagedComponent
from hostsync.domain.exceptions import DesiredStateError
from hostsync.domain.value_objects.key_value_record import KeyValueRecord
from hostsync.domain.value_objects.revision import Revision

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR_CANDIDATES = ("~/printer_data", "~/klipper_config")

DEFAULT_BRANDING = (
    {"namespace": "mainsail", "key": "general.printername", "value": "Shaper Compact"},
    {"namespace": "mainsail", "key": "uiSettings.primary", "value": "#D41216"},
)


def _read_document(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise DesiredStateError(f"Desired-state file not found: {path}") from e
    except OSError as e:
        raise DesiredStateError(f"Cannot read desired-state file {path}: {e}") from e

    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DesiredStateError(f"Invalid desired-state file {path}: {e}") from e

    if not isinstance(data, dict):
        raise DesiredStateError(
            f"Desired-state file must be a mapping, got {type(data).__name__}"
        )
    return data


def _resolve(value: str, base: Path) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base / path


def _require(item: Any, keys: tuple[str, ...], section: str) -> dict[str, Any]:
    if not isinstance(item, dict):
        raise DesiredStateError(f"Each {section} entry must be a mapping: {item!r}")
    missing = [k for k in keys if not item.get(k)]
    if missing:
        raise DesiredStateError(f"{section} entry {item!r} is missing {', '.join(missing)}")
    return item


def _list_section(data: dict[str, Any], section: str) -> list:
    value = data.get(section) or []
    if not isinstance(value, list):
        raise DesiredStateError(f"'{section}' must be a list")
    return value


def pin_placeholder(component_name: str) -> str:
    return "_" + re.sub(r"[^A-Z0-9]", "_", component_name.upper()) + "_PINNED_VERSION_"


def detect_data_dir(candidates: list[str]) -> Path:
    for candidate in candidates:
        path = Path(candidate).expanduser()
        if path.is_dir():
            return path
    raise DesiredStateError(
        "Could not find a data directory under: " + ", ".join(candidates)
    )


def _build_components(data: dict[str, Any], base: Path) -> list[ManagedComponent]:
    components = []
    for item in _list_section(data, "components"):
        item = _require(item, ("name", "path"), "components")
        pin = str(item.get("pin") or "").strip()
        components.append(
            ManagedComponent(
                name=str(item["name"]),
                path=_resolve(str(item["path"]), base),
                desired_pin=Revision(pin) if pin else None,
            )
        )
    names = [c.name for c in components]
    duplicates = {n for n in names if names.count(n) > 1}
    if duplicates:
        raise DesiredStateError(f"Duplicate component names: {', '.join(sorted(duplicates))}")
    return components


def _build_substitutions(
    data: dict[str, Any], components: list[ManagedComponent]
) -> dict[str, str]:
    substitutions: dict[str, str] = {}
    for component in components:
        if component.desired_pin is not None:
            substitutions[pin_placeholder(component.name)] = str(component.desired_pin)
    explicit = data.get("substitutions") or {}
    if not isinstance(explicit, dict):
        raise DesiredStateError("'substitutions' must be a mapping")
    for placeholder, value in explicit.items():
        substitutions[str(placeholder)] = "" if value is None else str(value)
    return substitutions


def _build_artifacts(
    data: dict[str, Any], source_dir: Path, config_root: Path, backup_dir: Path
) -> list[ConfigArtifact]:
    artifacts = []
    missing = []
    for item in _list_section(data, "artifacts"):
        item = _require(item, ("source",), "artifacts")
        source = _resolve(str(item["source"]), source_dir)
        destination = _resolve(str(item.get("destination") or item["source"]), config_root)
        if not source.is_file():
            missing.append(str(source))
        artifacts.append(
            ConfigArtifact(
                source=source,
                destination=destination,
                backup_dir=backup_dir,
                template=bool(item.get("template", False)),
            )
        )
    if missing:
        raise DesiredStateError(f"Missing artifact source(s): {', '.join(missing)}")
    return artifacts


def _build_bulk_assets(
    data: dict[str, Any], source_dir: Path, config_root: Path
) -> list[BulkAssetDirectory]:
    assets = []
    for item in _list_section(data, "bulk_assets"):
        item = _require(item, ("source", "destination"), "bulk_assets")
        assets.append(
            BulkAssetDirectory(
                source=_resolve(str(item["source"]), source_dir),
                destination=_resolve(str(item["destination"]), config_root),
                label=str(item.get("label") or item["destination"]),
            )
        )
    return assets


def _build_allowlist(
    data: dict[str, Any], data_dir: Path
) -> Optional[ServiceAllowlist]:
    item = data.get("allowlist")
    if not item:
        return None
    item = _require(item, ("path", "entry"), "allowlist")
    strays = item.get("stray_paths") or []
    if not isinstance(strays, list):
        raise DesiredStateError("'allowlist.stray_paths' must be a list")
    try:
        return ServiceAllowlist(
            path=_resolve(str(item["path"]), data_dir),
            entry=str(item["entry"]),
            stray_paths=tuple(_resolve(str(s), data_dir) for s in strays),
        )
    except ValueError as e:
        raise DesiredStateError(str(e)) from e


def _build_branding(data: dict[str, Any]) -> tuple[KeyValueRecord, ...]:
    items = data.get("branding", DEFAULT_BRANDING)
    if items is None:
        return ()
    if not isinstance(items, (list, tuple)):
        raise DesiredStateError("'branding' must be a list")
    records = []
    for item in items:
        item = _require(item, ("namespace", "key"), "branding")
        records.append(
            KeyValueRecord(
                namespace=str(item["namespace"]),
                key=str(item["key"]),
                value=item.get("value"),
            )
        )
    return tuple(records)


def load_desired_state(path: str) -> DesiredState:
    """Load and validate a desired-state document.

    Raises:
        DesiredStateError: if the document is unreadable, malformed, refers to
            missing artifact sources, or no data directory can be found.
    """
    state_path = Path(path).expanduser().resolve()
    data = _read_document(state_path)
    base = state_path.parent

    candidates = data.get("data_dir_candidates") or list(DEFAULT_DATA_DIR_CANDIDATES)
    if isinstance(candidates, str):
        candidates = [candidates]
    data_dir = detect_data_dir([str(c) for c in candidates])

    config_root = data_dir / str(data.get("config_subdir") or "config")
    backup_dir = config_root / str(data.get("backup_subdir") or "Backup")
    source_dir = _resolve(str(data.get("source_dir") or "configs"), base)
    if not source_dir.is_dir():
        raise DesiredStateError(f"Missing source directory: {source_dir}")

    components = _build_components(data, base)
    hygiene = data.get("hygiene_repository")

    state = DesiredState(
        data_dir=data_dir,
        config_root=config_root,
        backup_dir=backup_dir,
        components=components,
        artifacts=_build_artifacts(data, source_dir, config_root, backup_dir),
        bulk_assets=_build_bulk_assets(data, source_dir, config_root),
        substitutions=_build_substitutions(data, components),
        allowlist=_build_allowlist(data, data_dir),
        branding=_build_branding(data),
        hygiene_repository=_resolve(str(hygiene), base) if hygiene else None,
    )
    logger.info(
        "Loaded desired state %s (data dir %s, %d components, %d artifacts)",
        state_path,
        data_dir,
        len(state.components),
        len(state.artifacts),
    )
    return state
