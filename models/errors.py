"""
Error taxonomy shared by the validation engine and its remote collaborators.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(Enum):
    """Broad failure categories callers can branch on."""
    INVALID_FORMAT = "invalid_format"
    OUT_OF_RANGE = "out_of_range"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INCOMPATIBLE = "incompatible"
    FORBIDDEN = "forbidden"
    REMOTE_FAILURE = "remote_failure"

    def __str__(self) -> str:
        return self.value


class RosaToolsError(Exception):
    """
    Base exception for every failure raised by rosa-tools.

    Carries the error kind plus structured details (expected/actual counts,
    offending ARN, ...) so callers can branch without matching message text.
    """
    kind = ErrorKind.REMOTE_FAILURE

    def __init__(self, message: str, kind: Optional[ErrorKind] = None, **details: Any):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        self.details: Dict[str, Any] = details

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a serializable dictionary."""
        return {
            'kind': self.kind.value,
            'message': self.message,
            'details': self.details
        }


# Invalid input

class ValidationError(RosaToolsError):
    """Raised when a user-supplied value fails a structural check."""
    kind = ErrorKind.INVALID_FORMAT


class InvalidVersionError(ValidationError):
    """Raised when a version string cannot be parsed."""

    def __init__(self, version: str, reason: str = ""):
        message = f"Invalid version '{version}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, version=version)


class InvalidDiskSizeFormatError(ValidationError):
    """Raised when a disk size string is not a valid quantity."""

    def __init__(self, message: str, size: str):
        super().__init__(message, size=size)


class MissingUnitSuffixError(InvalidDiskSizeFormatError):
    """Raised when a non-zero disk size has no unit suffix."""


class DiskSizeUnitTooSmallError(InvalidDiskSizeFormatError):
    """Raised when a disk size uses a unit below gibibytes."""


class InvalidARNError(ValidationError):
    """Raised when a string is not a valid AWS ARN."""

    def __init__(self, arn: str, reason: str = ""):
        message = f"Invalid ARN '{arn}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, arn=arn)


# Out of range

class SubnetCountMismatchError(RosaToolsError):
    """Raised when the number of subnets does not fit the cluster topology."""
    kind = ErrorKind.OUT_OF_RANGE

    def __init__(self, message: str, expected: int, got: int, minimum: bool = False):
        super().__init__(message, expected=expected, got=got, minimum=minimum)
        self.expected = expected
        self.got = got
        self.minimum = minimum


class AvailabilityZoneCountError(RosaToolsError):
    """Raised when the number of availability zones does not fit the topology."""
    kind = ErrorKind.OUT_OF_RANGE

    def __init__(self, message: str, expected: int, got: int):
        super().__init__(message, expected=expected, got=got)
        self.expected = expected
        self.got = got


class SubnetIsolationError(RosaToolsError):
    """Raised when private/public subnet counts contradict the requested visibility."""
    kind = ErrorKind.OUT_OF_RANGE

    def __init__(self, message: str, is_private: bool, private_count: int, public_count: int):
        super().__init__(message, is_private=is_private,
                         private_count=private_count, public_count=public_count)


# Not found

class NotFoundError(RosaToolsError):
    """Raised when a remote resource cannot be resolved."""
    kind = ErrorKind.NOT_FOUND


class NoVersionsAvailableError(NotFoundError):
    """Raised when a channel group yields no usable versions."""

    def __init__(self, channel_group: str):
        super().__init__(
            f"Could not find versions for the provided channel-group: '{channel_group}'",
            channel_group=channel_group
        )


# Conflict

class AccountAlreadyLinkedError(RosaToolsError):
    """Raised when an AWS account already has a different role linked."""
    kind = ErrorKind.CONFLICT

    def __init__(self, owner_id: str, linked_arn: str, requested_arn: str):
        super().__init__(
            f"User organization '{owner_id}' has role-arn '{linked_arn}' associated. "
            "Only one role can be linked per AWS account per organization",
            owner_id=owner_id, linked_arn=linked_arn, requested_arn=requested_arn
        )
        self.linked_arn = linked_arn


class RoleNotLinkedError(RosaToolsError):
    """Raised when unlinking a role ARN that is not linked."""
    kind = ErrorKind.CONFLICT

    def __init__(self, message: str, owner_id: str, role_arn: str):
        super().__init__(message, owner_id=owner_id, role_arn=role_arn)


# Incompatible

class InvalidUpgradeTargetError(RosaToolsError):
    """Raised when an upgrade target is not one of the available versions."""
    kind = ErrorKind.INCOMPATIBLE

    def __init__(self, requested: str, valid_versions: List[str]):
        super().__init__(
            "Expected a valid version to upgrade cluster to.\n"
            f"Valid versions: {', '.join(valid_versions)}",
            requested=requested, valid_versions=valid_versions
        )
        self.valid_versions = valid_versions


class InvalidPolicyVersionError(RosaToolsError):
    """Raised when a requested policy version is not offered by the channel."""
    kind = ErrorKind.INCOMPATIBLE

    def __init__(self, requested: str, valid_versions: List[str]):
        super().__init__(
            "A valid policy version number must be specified\n"
            f"Valid versions: {', '.join(valid_versions)}",
            requested=requested, valid_versions=valid_versions
        )


class OperatorRoleError(RosaToolsError):
    """Base class for operator role compatibility failures."""
    kind = ErrorKind.INCOMPATIBLE

    def __init__(self, message: str, role_arn: str, **details: Any):
        super().__init__(message, role_arn=role_arn, **details)
        self.role_arn = role_arn


class PathMismatchError(OperatorRoleError):
    """Operator role path differs from the installer role path."""


class RoleIdentityMismatchError(OperatorRoleError):
    """Resolved operator role ARN differs from the expected ARN."""


class UntrustedIssuerError(OperatorRoleError):
    """Operator role trust policy does not reference the OIDC issuer."""


class ManagedPolicyMismatchError(OperatorRoleError):
    """Account roles use managed policies but the operator role does not."""


class PolicyVersionIncompatibleError(OperatorRoleError):
    """An attached policy does not support the cluster version."""


# Remote

class ForbiddenError(RosaToolsError):
    """Raised when a remote service denies the request."""
    kind = ErrorKind.FORBIDDEN


class RemoteServiceError(RosaToolsError):
    """Raised for unexpected remote service or transport failures."""
    kind = ErrorKind.REMOTE_FAILURE

    def __init__(self, message: str, status: Optional[int] = None, code: str = "", **details: Any):
        super().__init__(message, status=status, code=code, **details)
        self.status = status
        self.code = code
