"""
Version parsing and comparison utilities for OpenShift releases.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from models.cluster import VersionRecord
from models.errors import (
    InvalidPolicyVersionError,
    InvalidUpgradeTargetError,
    InvalidVersionError,
    NoVersionsAvailableError,
)


VERSION_PREFIX = "openshift-v"


@dataclass
class VersionInfo:
    """Structured version information."""
    major: int
    minor: int
    patch: int
    extra: Tuple[int, ...] = ()
    prerelease: str = ""
    build: str = ""
    channel_group: str = ""
    original: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.base_version

    def _key(self) -> tuple:
        extra = list(self.extra)
        while extra and extra[-1] == 0:
            extra.pop()
        if self.prerelease:
            pre = tuple(
                (0, int(part), "") if part.isdigit() else (1, 0, part)
                for part in self.prerelease.split(".")
            )
            return (self.major, self.minor, self.patch, tuple(extra), 0, pre)
        return (self.major, self.minor, self.patch, tuple(extra), 1, ())

    def __eq__(self, other) -> bool:
        """Check version equality (build metadata is ignored)."""
        if not isinstance(other, VersionInfo):
            return False
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other) -> bool:
        return self == other or self < other

    def __gt__(self, other) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other) -> bool:
        return self == other or self > other

    @property
    def segments(self) -> Tuple[int, ...]:
        """Numeric segments, always at least (major, minor, patch)."""
        return (self.major, self.minor, self.patch) + self.extra

    @property
    def base_version(self) -> str:
        """Canonical form: x.y.z plus any pre-release tag."""
        base = ".".join(str(s) for s in self.segments)
        return f"{base}-{self.prerelease}" if self.prerelease else base

    @property
    def minor_version(self) -> str:
        """Get minor version (x.y)."""
        return f"{self.major}.{self.minor}"

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)


class VersionParser:
    """Parser for OpenShift version strings."""

    PATTERN = re.compile(
        r"^v?(?P<segments>\d+(?:\.\d+)*)"
        r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
        r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
    )

    @classmethod
    def strip_prefix(cls, version_string: str) -> str:
        """Remove the product version prefix ('openshift-v4.12.3' -> '4.12.3')."""
        return version_string.replace(VERSION_PREFIX, "", 1)

    @classmethod
    def parse_version(cls, version_string: str, channel_group: str = "") -> VersionInfo:
        """
        Parse a version string into structured version information.

        Args:
            version_string: Version string, optionally prefixed with 'openshift-v'
            channel_group: Channel group whose '-<group>' suffix should be dropped

        Returns:
            VersionInfo object

        Raises:
            InvalidVersionError: If the string is not a dotted numeric version
        """
        if not version_string or not version_string.strip():
            raise InvalidVersionError(version_string or "", "version cannot be empty")

        raw = cls.strip_prefix(version_string.strip())
        if channel_group:
            raw = raw.replace(f"-{channel_group}", "", 1)

        match = cls.PATTERN.match(raw)
        if not match:
            raise InvalidVersionError(version_string, "expected a dotted numeric version such as 4.12.3")

        segments = [int(s) for s in match.group('segments').split(".")]
        while len(segments) < 3:
            segments.append(0)

        return VersionInfo(
            major=segments[0],
            minor=segments[1],
            patch=segments[2],
            extra=tuple(segments[3:]),
            prerelease=match.group('prerelease') or "",
            build=match.group('build') or "",
            channel_group=channel_group,
            original=version_string
        )

    @classmethod
    def try_parse_version(cls, version_string: str, channel_group: str = "") -> Optional[VersionInfo]:
        """Parse a version string, returning None instead of raising."""
        try:
            return cls.parse_version(version_string, channel_group)
        except InvalidVersionError:
            return None

    @classmethod
    def parse_minor(cls, version_string: str) -> str:
        """Parse a version strictly and return its 'major.minor' form."""
        return cls.parse_version(version_string).minor_version


def get_version_minor(version_string: str) -> str:
    """
    Get the 'major.minor' form of a version for display.

    Falls back to a naive split on '.' when the version does not parse; the
    fallback result must not be used for comparisons.
    """
    raw = VersionParser.strip_prefix(version_string)
    parsed = VersionParser.try_parse_version(raw)
    if parsed:
        return parsed.minor_version
    return ".".join(raw.split(".")[:2])


VersionLike = Union[str, VersionInfo]


def _as_version(version: VersionLike) -> VersionInfo:
    if isinstance(version, VersionInfo):
        return version
    return VersionParser.parse_version(version)


class VersionComparator:
    """Utilities for comparing versions."""

    @staticmethod
    def compare_versions(v1: VersionLike, v2: VersionLike) -> int:
        """
        Compare two versions.

        Returns:
            -1 if v1 < v2, 0 if v1 == v2, 1 if v1 > v2
        """
        version1 = _as_version(v1)
        version2 = _as_version(v2)

        if version1 < version2:
            return -1
        elif version1 > version2:
            return 1
        return 0

    @staticmethod
    def greater_or_equal(v1: VersionLike, v2: VersionLike) -> bool:
        """Check whether v1 >= v2."""
        return _as_version(v1) >= _as_version(v2)

    @staticmethod
    def supports_feature_floor(cluster_version: VersionLike, min_version: VersionLike) -> bool:
        """Check whether a cluster version meets an operator or feature minimum version."""
        return VersionComparator.greater_or_equal(cluster_version, min_version)

    @staticmethod
    def sort_versions(versions: Iterable[str], reverse: bool = False) -> List[str]:
        """Sort version strings by their parsed value."""
        return sorted(versions, key=_as_version, reverse=reverse)

    @staticmethod
    def find_latest_version(versions: List[str]) -> Optional[str]:
        if not versions:
            return None
        return VersionComparator.sort_versions(versions, reverse=True)[0]


class OpenShiftVersionUtils:
    """OpenShift-specific version rules."""

    # Lowest release that supports STS (IAM role based) clusters
    LOWEST_STS_SUPPORT = "4.7.11"
    LOWEST_STS_MINOR = "4.7"
    NIGHTLY_CHANNEL = "nightly"

    @classmethod
    def has_sts_support(cls, raw_id: str, channel_group: str) -> bool:
        """Check whether a version supports STS clusters."""
        if channel_group == cls.NIGHTLY_CHANNEL:
            return True
        version = VersionParser.try_parse_version(raw_id, channel_group)
        if not version:
            return False
        return version >= VersionParser.parse_version(cls.LOWEST_STS_SUPPORT)

    @classmethod
    def has_sts_support_minor(cls, minor: str) -> bool:
        version = VersionParser.try_parse_version(minor)
        if not version:
            return False
        return version >= VersionParser.parse_version(cls.LOWEST_STS_MINOR)

    @classmethod
    def filter_by_channel(cls, records: Iterable[VersionRecord], channel_group: str,
                          require_sts_support: bool = True) -> List[VersionInfo]:
        """
        Keep the versions that belong to a channel group.

        Args:
            records: Versions returned by OCM
            channel_group: Channel group to keep (e.g. "stable", "candidate"); empty keeps every group
            require_sts_support: Drop versions that predate STS support

        Returns:
            Parsed versions in the order they were supplied

        Raises:
            NoVersionsAvailableError: If nothing is left after filtering
            InvalidVersionError: If a kept version does not parse
        """
        versions = []
        for record in records:
            if channel_group and record.channel_group != channel_group:
                continue
            if require_sts_support and not cls.has_sts_support(record.raw_id, record.channel_group):
                continue
            versions.append(VersionParser.parse_version(record.raw_id, record.channel_group))

        if not versions:
            raise NoVersionsAvailableError(channel_group)
        return versions

    @classmethod
    def get_versions_list(cls, records: Iterable[VersionRecord], channel_group: str,
                          require_sts_support: bool = True) -> List[str]:
        """Get the distinct 'major.minor' versions of a channel group, in supplied order."""
        minors: List[str] = []
        for version in cls.filter_by_channel(records, channel_group, require_sts_support):
            if version.minor_version not in minors:
                minors.append(version.minor_version)
        return minors

    @staticmethod
    def is_valid_version(requested: str, supported: str, cluster_version: str = "") -> bool:
        """
        Check whether a requested version names a supported version.

        Both sides are canonicalized ('4.12', '4.12.0' and '4.12.0.0' are the
        same version); no nearest-version matching is done. When the cluster's
        current version is known the requested version must be newer.
        """
        requested_version = VersionParser.parse_version(requested)
        supported_version = VersionParser.parse_version(supported)
        if requested_version != supported_version:
            return False
        current = VersionParser.try_parse_version(cluster_version) if cluster_version else None
        return current is None or requested_version > current

    @classmethod
    def validate_upgrade_target(cls, available: List[str], requested: str,
                                current_cluster_version: str = "") -> None:
        """
        Validate that a requested upgrade version is one of the available upgrades.

        Raises:
            InvalidVersionError: If the requested version does not parse
            InvalidUpgradeTargetError: If no available version matches
        """
        VersionParser.parse_version(requested)
        for version in available:
            if cls.is_valid_version(requested, version, current_cluster_version):
                return
        raise InvalidUpgradeTargetError(requested, VersionComparator.sort_versions(available))

    @staticmethod
    def resolve_policy_version(requested: str, versions_list: List[str]) -> str:
        """
        Resolve the policy version to use.

        An empty request resolves to the latest listed version; otherwise the
        request must be listed verbatim.
        """
        if not versions_list:
            raise InvalidPolicyVersionError(requested, [])
        if not requested:
            return VersionComparator.find_latest_version(versions_list)
        if requested not in versions_list:
            raise InvalidPolicyVersionError(requested, VersionComparator.sort_versions(set(versions_list)))
        return requested


# Convenience functions

def parse_version(version_string: str) -> VersionInfo:
    return VersionParser.parse_version(version_string)


def compare_versions(v1: str, v2: str) -> int:
    return VersionComparator.compare_versions(v1, v2)


def check_supported_version(cluster_version: str, operator_version: str) -> bool:
    """Check that a cluster version is at least an operator's minimum version."""
    return VersionComparator.supports_feature_floor(cluster_version, operator_version)
