"""
Application Use Cases Package

Architectural Intent:
- One use case per orchestration step, wired together by SyncHost
"""

from hostsync.application.use_cases.deploy_artifact import DeployArtifact
from hostsync.application.use_cases.enforce_version_pin import EnforceVersionPin
from hostsync.application.use_cases.ensure_allowlist_entry import EnsureAllowlistEntry
from hostsync.application.use_cases.render_template import RenderTemplate
from hostsync.application.use_cases.replace_directory import ReplaceDirectory
from hostsync.application.use_cases.resync_services import ResyncResult, ResyncServices
from hostsync.application.use_cases.rollback_run import RollbackResult, RollbackRun
from hostsync.application.use_cases.sync_host import SyncHost
from hostsync.application.use_cases.upgrade_system import UpgradeSystem

__all__ = [
    "DeployArtifact",
    "EnforceVersionPin",
    "EnsureAllowlistEntry",
    "RenderTemplate",
    "ReplaceDirectory",
    "ResyncResult",
    "ResyncServices",
    "RollbackResult",
    "RollbackRun",
    "SyncHost",
    "UpgradeSystem",
]
