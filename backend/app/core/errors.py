"""Error taxonomy for policy decisions and storage faults.

Policy errors are rejections the caller can act on; each carries the HTTP
status the API answers with. ``StorageUnavailable`` is a service fault and is
kept outside that hierarchy.
"""

from __future__ import annotations


class PolicyError(Exception):
    status_code: int = 400
    default_message: str = "Operation rejected"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InsufficientRole(PolicyError):
    status_code = 403
    default_message = "Insufficient permissions"


class InvalidTargetRole(PolicyError):
    status_code = 400
    default_message = "Target user has the wrong role for this operation"


class NotRelatedToProject(PolicyError):
    status_code = 403
    default_message = "You can only manage projects you lead, created, or belong to"


class DuplicateMembership(PolicyError):
    status_code = 400
    default_message = "User is already assigned to this project"


class TargetNotFound(PolicyError):
    status_code = 404
    default_message = "User not found"


class ProjectNotFound(PolicyError):
    status_code = 404
    default_message = "Project not found"


class DocumentNotFound(PolicyError):
    status_code = 404
    default_message = "Document not found"


class EmailAlreadyRegistered(PolicyError):
    status_code = 400
    default_message = "A user with this email already exists"


class InvalidCredentials(PolicyError):
    status_code = 401
    default_message = "Invalid credentials"


class InvalidPassword(PolicyError):
    status_code = 400
    default_message = "Current password is incorrect"


class StorageUnavailable(Exception):
    """Unexpected storage failure (connectivity loss, locked database, ...)."""

    status_code = 503
