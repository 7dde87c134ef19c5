"""
AWS ARN parsing helpers.
"""

import re
from dataclasses import dataclass

from models.errors import InvalidARNError


ARN_PATTERN = re.compile(
    r"^arn:(?P<partition>aws[a-z-]*):(?P<service>[a-z0-9-]+):(?P<region>[a-z0-9-]*):"
    r"(?P<account>[0-9]*):(?P<resource>.+)$"
)

AWS_ACCOUNT_ID_PATTERN = re.compile(r"^[0-9]{12}$")


@dataclass
class ARN:
    """Components of an AWS ARN."""
    partition: str
    service: str
    region: str
    account_id: str
    resource: str

    def __str__(self) -> str:
        return f"arn:{self.partition}:{self.service}:{self.region}:{self.account_id}:{self.resource}"

    @property
    def resource_type(self) -> str:
        """Resource type, e.g. 'role' for 'role/path/name'."""
        return re.split(r"[/:]", self.resource, maxsplit=1)[0]

    @property
    def resource_name(self) -> str:
        """Last path segment of the resource, e.g. the role name."""
        return self.resource.rsplit("/", 1)[-1]

    @property
    def path(self) -> str:
        """
        IAM path of the resource ('/' when the resource has no path).

        'role/service-role/my-role' has path '/service-role/'.
        """
        parts = self.resource.split("/")
        if len(parts) <= 2:
            return "/"
        return "/" + "/".join(parts[1:-1]) + "/"


def parse_arn(arn: str) -> ARN:
    """
    Parse an AWS ARN.

    Raises:
        InvalidARNError: If the string is not an ARN
    """
    if not arn:
        raise InvalidARNError(arn or "", "ARN cannot be empty")
    match = ARN_PATTERN.match(arn)
    if not match:
        raise InvalidARNError(arn, "expected arn:partition:service:region:account:resource")
    return ARN(
        partition=match.group('partition'),
        service=match.group('service'),
        region=match.group('region'),
        account_id=match.group('account'),
        resource=match.group('resource')
    )


def is_valid_arn(arn: str) -> bool:
    return bool(arn) and bool(ARN_PATTERN.match(arn))


def get_account_id(arn: str) -> str:
    return parse_arn(arn).account_id


def get_path_from_arn(arn: str) -> str:
    return parse_arn(arn).path


def get_resource_name(arn: str) -> str:
    return parse_arn(arn).resource_name
