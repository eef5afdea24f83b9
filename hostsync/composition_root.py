"""
Composition Root

Architectural Intent:
- Dependency injection composition root for hostsync
- Single place where all adapters and use cases are wired together
- No adapter instantiation should occur outside this module

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Factory function creates and wires all dependencies from a HostSyncConfig
"""

from dataclasses import dataclass
from typing import Optional
from hostsync.infrastructure.adapters.apt_adapter import AptPackageManager
from hostsync.infrastructure.adapters.git_adapter import GitRevisionStore
from hostsync.infrastructure.adapters.http_key_value_adapter import HttpKeyValueService
from hostsync.infrastructure.adapters.local_filesystem import LocalFilesystem
from hostsync.infrastructure.adapters.systemd_adapter import SystemdSupervisor
from hostsync.infrastructure.config import HostSyncConfig, load_config
from hostsync.infrastructure.desired_state import load_desired_state
from hostsync.application.use_cases.deploy_artifact import DeployArtifact
from hostsync.application.use_cases.enforce_version_pin import EnforceVersionPin
from hostsync.application.use_cases.ensure_allowlist_entry import EnsureAllowlistEntry
from hostsync.application.use_cases.render_template import RenderTemplate
from hostsync.application.use_cases.replace_directory import ReplaceDirectory
from hostsync.application.use_cases.resync_services import ResyncServices
from hostsync.application.use_cases.rollback_run import RollbackRun
from hostsync.application.use_cases.sync_host import SyncHost
from hostsync.application.use_cases.upgrade_system import UpgradeSystem


@dataclass
class HostSyncContainer:
    """DI container holding all wired dependencies."""

    config: HostSyncConfig
    revision_store: GitRevisionStore
    filesystem: LocalFilesystem
    supervisor: SystemdSupervisor
    key_value: HttpKeyValueService
    package_manager: AptPackageManager
    resync: ResyncServices
    rollback: RollbackRun
    sync_host: SyncHost


def create_container(config: Optional[HostSyncConfig] = None) -> HostSyncContainer:
    """Create and wire all dependencies."""
    config = config or load_config()

    revision_store = GitRevisionStore()
    filesystem = LocalFilesystem()
    supervisor = SystemdSupervisor(use_sudo=config.services.use_sudo)
    key_value = HttpKeyValueService(
        base_url=config.keyvalue.base_url,
        info_path=config.keyvalue.info_path,
        item_path=config.keyvalue.item_path,
        timeout_seconds=config.keyvalue.timeout_seconds,
    )
    package_manager = AptPackageManager(use_sudo=config.services.use_sudo)

    resync = ResyncServices(
        supervisor,
        key_value,
        services=config.services.restart,
        readiness_attempts=config.keyvalue.readiness_attempts,
        readiness_interval=config.keyvalue.readiness_interval,
    )
    rollback = RollbackRun(resync)

    sync_host = SyncHost(
        load_desired_state=load_desired_state,
        filesystem=filesystem,
        revision_store=revision_store,
        enforce_pin=EnforceVersionPin(revision_store),
        render_template=RenderTemplate(filesystem),
        deploy_artifact=DeployArtifact(filesystem),
        replace_directory=ReplaceDirectory(filesystem),
        ensure_allowlist=EnsureAllowlistEntry(filesystem),
        upgrade_system=UpgradeSystem(package_manager),
        rollback=rollback,
        resync=resync,
        required_commands=config.run.required_commands,
    )

    return HostSyncContainer(
        config=config,
        revision_store=revision_store,
        filesystem=filesystem,
        supervisor=supervisor,
        key_value=key_value,
        package_manager=package_manager,
        resync=resync,
        rollback=rollback,
        sync_host=sync_host,
    )
