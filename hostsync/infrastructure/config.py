"""
Configuration Module

Architectural Intent:
- Centralized loading of hostsync's own settings (not the desired state)
- Provides typed access to run, service, key-value, logging and telemetry settings
- Falls back to sensible defaults when the config file is absent
- Environment variables override file-based config

Design Decisions:
- JSON config file, hostsync.json in CWD by default
- Config is a frozen dataclass for immutability after load
- Section names carry no underscore so HOSTSYNC_SECTION_FIELD splits unambiguously
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import dataclasses
import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_SERVICES = ("klipper", "moonraker", "KlipperScreen", "crowsnest", "nginx")


@dataclass(frozen=True)
class RunConfig:
    """Run mode and inputs."""
    check_only: bool = False
    system_upgrade: bool = False
    desired_state: str = "hostsync.yaml"
    required_commands: tuple[str, ...] = ("git", "systemctl")


@dataclass(frozen=True)
class ServicesConfig:
    """Dependent services restarted after a run."""
    restart: tuple[str, ...] = DEFAULT_SERVICES
    use_sudo: bool = True


@dataclass(frozen=True)
class KeyValueConfig:
    """Dependent key-value service."""
    base_url: str = "http://127.0.0.1:7125"
    info_path: str = "/info"
    item_path: str = "/item"
    timeout_seconds: float = 5.0
    readiness_attempts: int = 30
    readiness_interval: float = 1.0


@dataclass(frozen=True)
class LoggingConfig:
    """Log level and destinations."""
    level: str = "INFO"
    file: str = "/tmp/hostsync-update.log"
    json_format: bool = False


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    insecure: bool = False


@dataclass(frozen=True)
class HostSyncConfig:
    """Root configuration for hostsync."""
    run: RunConfig = field(default_factory=RunConfig)
    services: ServicesConfig = field(default_factory=ServicesConfig)
    keyvalue: KeyValueConfig = field(default_factory=KeyValueConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)


def _env_override(data: dict, prefix: str = "HOSTSYNC") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern HOSTSYNC_SECTION_FIELD.
    For example: HOSTSYNC_RUN_CHECK_ONLY=true, HOSTSYNC_SERVICES_RESTART=klipper,nginx
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        parts = key[len(prefix) + 1:].lower().split("_", 1)
        if len(parts) != 2:
            continue
        section, field_name = parts
        if not isinstance(data.get(section), dict):
            data[section] = {}
        data[section][field_name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not an object, ignoring", path)
        return {}
    return data


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    for f in dataclasses.fields(cls):
        if f.name not in filtered:
            continue
        val = filtered[f.name]

        # Comma-separated strings and lists become tuples
        if f.type == "tuple[str, ...]":
            if isinstance(val, str):
                filtered[f.name] = tuple(v.strip() for v in val.split(",") if v.strip())
            elif isinstance(val, list):
                filtered[f.name] = tuple(val)

        if isinstance(val, str):
            if f.type == "int":
                filtered[f.name] = int(val)
            elif f.type == "float":
                filtered[f.name] = float(val)
            elif f.type == "bool":
                filtered[f.name] = val.lower() in ("true", "1", "yes")

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "HOSTSYNC",
) -> HostSyncConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (HOSTSYNC_SECTION_FIELD)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to hostsync.json in CWD.
        env_prefix: Environment variable prefix. Defaults to HOSTSYNC.
    """
    config_path = Path(path) if path else Path("hostsync.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return HostSyncConfig(
        run=_build_sub_config(RunConfig, data.get("run", {})),
        services=_build_sub_config(ServicesConfig, data.get("services", {})),
        keyvalue=_build_sub_config(KeyValueConfig, data.get("keyvalue", {})),
        logging=_build_sub_config(LoggingConfig, data.get("logging", {})),
        telemetry=_build_sub_config(TelemetryConfig, data.get("telemetry", {})),
    )
