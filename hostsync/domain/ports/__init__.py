"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Lets the orchestration run against in-memory fakes in tests
"""

from hostsync.domain.ports.revision_store_port import RevisionStorePort
from hostsync.domain.ports.filesystem_port import FilesystemPort
from hostsync.domain.ports.service_supervisor_port import ServiceSupervisorPort
from hostsync.domain.ports.key_value_port import KeyValueServicePort
from hostsync.domain.ports.package_manager_port import PackageManagerPort

__all__ = [
    "RevisionStorePort",
    "FilesystemPort",
    "ServiceSupervisorPort",
    "KeyValueServicePort",
    "PackageManagerPort",
]
