"""
IAM models for operator roles, attached policies and linked role labels.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class PolicyType(Enum):
    """How a policy is attached to a role."""
    INLINE = "Inline"
    ATTACHED = "Attached"

    def __str__(self) -> str:
        return self.value


class RoleKind(Enum):
    """Role kinds whose ARNs are linked through OCM labels."""
    OCM = "ocm"
    USER = "user"

    @property
    def label_key(self) -> str:
        """OCM label key that stores linked ARNs for this role kind."""
        return OCM_ROLE_LABEL if self == RoleKind.OCM else USER_ROLE_LABEL

    @property
    def owner_kind(self) -> str:
        """OCM resource collection the label lives on."""
        return "organizations" if self == RoleKind.OCM else "accounts"


OCM_ROLE_LABEL = "sts_ocm_role"
USER_ROLE_LABEL = "sts_user_role"


@dataclass
class AttachedPolicy:
    """A policy attached to an IAM role."""
    policy_name: str
    policy_type: PolicyType
    policy_arn: str = ""

    @property
    def is_inline(self) -> bool:
        return self.policy_type == PolicyType.INLINE


@dataclass
class IAMRole:
    """Live IAM role fetched from AWS."""
    arn: str
    role_name: str
    path: str = "/"
    assume_role_policy_document: str = ""
    tags: Dict[str, str] = field(default_factory=dict)

    @staticmethod
    def normalize_policy_document(document: Union[str, Dict[str, Any], None]) -> str:
        """
        Return the trust policy document as text.

        boto3 decodes IAM policy documents into dictionaries while the raw API
        returns URL-encoded JSON; both are reduced to a string.
        """
        if document is None:
            return ""
        if isinstance(document, dict):
            return json.dumps(document)
        return document

    @classmethod
    def from_iam(cls, data: Dict[str, Any]) -> 'IAMRole':
        """Create from an IAM GetRole 'Role' structure."""
        return cls(
            arn=data.get('Arn', ''),
            role_name=data.get('RoleName', ''),
            path=data.get('Path', '/'),
            assume_role_policy_document=cls.normalize_policy_document(
                data.get('AssumeRolePolicyDocument')
            ),
            tags={t['Key']: t['Value'] for t in data.get('Tags', [])}
        )


@dataclass
class OperatorIAMRole:
    """An operator role expected by a cluster."""
    name: str
    namespace: str
    role_arn: str

    @classmethod
    def from_ocm(cls, data: Dict[str, Any]) -> 'OperatorIAMRole':
        return cls(
            name=data.get('name', ''),
            namespace=data.get('namespace', ''),
            role_arn=data.get('role_arn', '')
        )


@dataclass
class LinkedRoleLabel:
    """
    Comma-joined list of role ARNs stored as a single OCM label value.

    ARNs are not escaped; an ARN containing a comma cannot be represented.
    """
    key: str
    role_arns: List[str] = field(default_factory=list)

    @classmethod
    def parse(cls, key: str, value: Optional[str]) -> 'LinkedRoleLabel':
        """Parse a label value; a missing or empty value holds no ARNs."""
        if not value:
            return cls(key=key)
        return cls(key=key, role_arns=[arn for arn in value.split(",") if arn])

    def serialize(self) -> str:
        return ",".join(self.role_arns)

    def contains(self, role_arn: str) -> bool:
        return role_arn in self.role_arns

    @property
    def is_empty(self) -> bool:
        return not self.role_arns
