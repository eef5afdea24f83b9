"""
Domain Exceptions

Architectural Intent:
- Error taxonomy for a sync run
- PreconditionError: raised before any mutation, never rolled back
- TransactionalError: raised by a mutating step, triggers rollback
- Adapter errors are translated into RevisionStoreError / PackageManagerError
"""


class HostSyncError(Exception):
    pass


class PreconditionError(HostSyncError):
    pass


class DesiredStateError(PreconditionError):
    pass


class TransactionalError(HostSyncError):
    pass


class PinEnforcementError(TransactionalError):
    pass


class ArtifactDeploymentError(TransactionalError):
    pass


class DirectoryReplaceError(TransactionalError):
    pass


class AllowlistError(TransactionalError):
    pass


class RevisionStoreError(HostSyncError):
    pass


class PackageManagerError(HostSyncError):
    pass
