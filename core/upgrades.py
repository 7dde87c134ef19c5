"""
Version lookups that combine OCM data with the version rules.
"""

from typing import List

from models.cluster import Cluster
from models.errors import NotFoundError, RemoteServiceError
from utils.version_utils import OpenShiftVersionUtils


def get_versions_list(ocm_client, channel_group: str) -> List[str]:
    """
    Get the STS capable 'major.minor' versions of a channel group.

    Raises:
        RemoteServiceError: If the versions cannot be fetched
        NoVersionsAvailableError: If the channel group has no usable version
    """
    try:
        records = ocm_client.get_versions(channel_group)
    except (RemoteServiceError, NotFoundError) as e:
        raise RemoteServiceError(f"error getting versions: {e}")
    return OpenShiftVersionUtils.get_versions_list(records, channel_group)


def get_policy_version(ocm_client, requested_version: str, channel_group: str) -> str:
    """
    Resolve the policy version for account and operator role policies.

    An empty request resolves to the latest version of the channel group.
    """
    return OpenShiftVersionUtils.resolve_policy_version(
        requested_version, get_versions_list(ocm_client, channel_group)
    )


def check_upgrade_cluster_version(available_upgrades: List[str], requested_version: str,
                                  cluster: Cluster):
    """
    Validate an upgrade target for a cluster.

    Raises:
        InvalidUpgradeTargetError: If the version is not an available upgrade
    """
    OpenShiftVersionUtils.validate_upgrade_target(
        available_upgrades, requested_version, cluster.current_version
    )
