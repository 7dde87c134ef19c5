"""
OCM record models: clusters, versions, STS operators and STS policies.

Only the fields the validation engine inspects are modeled.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from models.iam import OperatorIAMRole


@dataclass
class VersionRecord:
    """An OpenShift version offered by OCM."""
    id: str
    raw_id: str
    channel_group: str = "stable"
    enabled: bool = True
    default: bool = False
    rosa_enabled: bool = True
    hosted_control_plane_enabled: bool = False
    available_upgrades: List[str] = field(default_factory=list)

    @classmethod
    def from_ocm(cls, data: Dict[str, Any]) -> 'VersionRecord':
        return cls(
            id=data.get('id', ''),
            raw_id=data.get('raw_id', ''),
            channel_group=data.get('channel_group', 'stable'),
            enabled=data.get('enabled', True),
            default=data.get('default', False),
            rosa_enabled=data.get('rosa_enabled', True),
            hosted_control_plane_enabled=data.get('hosted_control_plane_enabled', False),
            available_upgrades=data.get('available_upgrades', [])
        )


@dataclass
class STSOperator:
    """Operator credential request descriptor returned by OCM."""
    name: str
    namespace: str
    service_accounts: List[str] = field(default_factory=list)
    min_version: str = ""
    max_version: str = ""

    @classmethod
    def from_ocm(cls, data: Dict[str, Any]) -> 'STSOperator':
        return cls(
            name=data.get('name', ''),
            namespace=data.get('namespace', ''),
            service_accounts=data.get('service_accounts', []),
            min_version=data.get('min_version', ''),
            max_version=data.get('max_version', '')
        )


@dataclass
class STSPolicy:
    """Account or operator policy template published by OCM."""
    id: str
    arn: str = ""
    policy_type: str = ""
    details: str = ""

    @classmethod
    def from_ocm(cls, data: Dict[str, Any]) -> 'STSPolicy':
        return cls(
            id=data.get('id', ''),
            arn=data.get('arn', ''),
            policy_type=data.get('type', ''),
            details=data.get('details', '')
        )


@dataclass
class Cluster:
    """Cluster record subset used by the validators."""
    id: str
    name: str
    state: str = ""
    region: str = ""
    openshift_version: str = ""
    version_id: str = ""
    version_raw_id: str = ""
    channel_group: str = "stable"
    hypershift: bool = False
    multi_az: bool = False
    private_link: bool = False
    subnet_ids: List[str] = field(default_factory=list)
    installer_role_arn: str = ""
    oidc_endpoint_url: str = ""
    operator_iam_roles: List[OperatorIAMRole] = field(default_factory=list)

    @classmethod
    def from_ocm(cls, data: Dict[str, Any]) -> 'Cluster':
        aws = data.get('aws') or {}
        sts = aws.get('sts') or {}
        version = data.get('version') or {}
        return cls(
            id=data.get('id', ''),
            name=data.get('name', ''),
            state=data.get('state') or '',
            region=(data.get('region') or {}).get('id', ''),
            openshift_version=data.get('openshift_version') or '',
            version_id=version.get('id', ''),
            version_raw_id=version.get('raw_id') or '',
            channel_group=version.get('channel_group') or 'stable',
            hypershift=bool((data.get('hypershift') or {}).get('enabled')),
            multi_az=bool(data.get('multi_az')),
            private_link=bool(aws.get('private_link')),
            subnet_ids=list(aws.get('subnet_ids') or []),
            installer_role_arn=sts.get('role_arn') or '',
            oidc_endpoint_url=sts.get('oidc_endpoint_url') or '',
            operator_iam_roles=[
                OperatorIAMRole.from_ocm(role) for role in sts.get('operator_iam_roles') or []
            ]
        )

    @property
    def current_version(self) -> str:
        """Cluster version, preferring the reported OpenShift version."""
        return self.openshift_version or self.version_raw_id

    def has_operator_role(self, operator: STSOperator) -> bool:
        """Check whether the cluster already carries a role for an operator."""
        for role in self.operator_iam_roles:
            if role.namespace == operator.namespace and role.name == operator.name:
                return True
        return False
