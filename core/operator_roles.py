"""
Operator role validation against a cluster's OIDC provider and version.
"""

from typing import Dict, List
from urllib.parse import unquote_plus, urlparse

from models.cluster import Cluster, STSOperator
from models.errors import (
    ManagedPolicyMismatchError,
    PathMismatchError,
    PolicyVersionIncompatibleError,
    RemoteServiceError,
    RoleIdentityMismatchError,
    UntrustedIssuerError,
    ValidationError,
)
from models.iam import OperatorIAMRole
from utils.arn_utils import get_path_from_arn
from utils.version_utils import VersionParser


def issuer_from_url(oidc_endpoint_url: str) -> str:
    """
    Get the issuer string (host plus path) of an OIDC endpoint URL.

    Raises:
        ValidationError: If the URL has no host
    """
    parsed = urlparse(oidc_endpoint_url)
    if not parsed.netloc:
        raise ValidationError(f"Invalid OIDC endpoint URL '{oidc_endpoint_url}'", url=oidc_endpoint_url)
    return parsed.netloc + parsed.path


def validate_issuer_url_matches_assume_policy_document(role_arn: str, issuer: str,
                                                       assume_policy_document: str):
    """Check that a role's decoded trust policy mentions the OIDC issuer."""
    decoded = unquote_plus(assume_policy_document)
    if issuer not in decoded:
        raise UntrustedIssuerError(
            f"Operator role '{role_arn}' does not have trusted relationship to '{issuer}' issuer URL",
            role_arn, issuer=issuer
        )


def validate_operator_roles_match_oidc_provider(reporter, aws_client, operator_iam_roles: List[OperatorIAMRole],
                                                oidc_endpoint_url: str, cluster_version: str,
                                                expected_operator_role_path: str,
                                                account_roles_has_managed_policies: bool):
    """
    Validate that existing operator roles can be reused with a cluster.

    Roles are checked one after another and the first failure stops the run,
    so no AWS calls are made for later checks or later roles.

    Args:
        reporter: Output formatter; progress is narrated through its narrate()
        aws_client: AWS client
        operator_iam_roles: Roles the cluster expects
        oidc_endpoint_url: OIDC endpoint of the cluster
        cluster_version: Target cluster version
        expected_operator_role_path: IAM path of the installer role
        account_roles_has_managed_policies: Whether the account roles use managed policies

    Raises:
        OperatorRoleError subclass for the first incompatible role
    """
    issuer = issuer_from_url(oidc_endpoint_url)
    reporter.narrate("Reusable OIDC Configuration detected. Validating trusted relationships to operator roles: ")

    for operator_role in operator_iam_roles:
        role = aws_client.get_role_by_arn(operator_role.role_arn)
        role_arn = role.arn

        if get_path_from_arn(role_arn) != expected_operator_role_path:
            raise PathMismatchError(
                f"Operator Role '{role_arn}' does not match the path from Installer Role, "
                "please choose correct Installer Role and try again.",
                role_arn, expected_path=expected_operator_role_path
            )

        if role_arn != operator_role.role_arn:
            raise RoleIdentityMismatchError(
                f"Computed Operator Role '{operator_role.role_arn}' does not match role ARN found in AWS "
                f"'{role_arn}', please check if the correct parameters have been supplied.",
                role_arn, expected_arn=operator_role.role_arn
            )

        validate_issuer_url_matches_assume_policy_document(role_arn, issuer, role.assume_role_policy_document)

        has_managed_policies = aws_client.has_managed_policies(role_arn)
        if account_roles_has_managed_policies and not has_managed_policies:
            raise ManagedPolicyMismatchError(
                f"Operator role '{role_arn}' has unmanaged policies and is not compatible with the "
                "account role's managed policies.",
                role_arn
            )

        if not has_managed_policies:
            for policy in aws_client.get_attached_policies(role.role_name):
                if policy.is_inline:
                    continue
                if not aws_client.is_policy_compatible(policy.policy_arn, cluster_version):
                    raise PolicyVersionIncompatibleError(
                        f"Operator role '{role_arn}' is not compatible with cluster version '{cluster_version}'",
                        role_arn, policy_arn=policy.policy_arn, cluster_version=cluster_version
                    )

        reporter.narrate(f"Using '{role_arn}'")


def find_missing_operator_roles_for_upgrade(ocm_client, cluster: Cluster,
                                            new_minor_version: str) -> Dict[str, STSOperator]:
    """
    Find operators that need a role after upgrading a cluster.

    An operator is missing when its minimum version is at most the target
    version and the cluster has no role for it yet.

    Returns:
        Missing operators keyed by credential request name
    """
    try:
        cred_requests = ocm_client.get_cred_requests(cluster.hypershift)
    except RemoteServiceError as e:
        raise RemoteServiceError(f"Error getting operator credential request from OCM {e}",
                                 status=e.status, code=e.code)

    target = VersionParser.parse_version(new_minor_version)
    missing = {}
    for name, operator in cred_requests.items():
        if not operator.min_version:
            continue
        if target >= VersionParser.parse_version(operator.min_version) and not cluster.has_operator_role(operator):
            missing[name] = operator
    return missing
