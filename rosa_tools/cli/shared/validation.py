"""
Input validation utilities for rosa-tools CLI
"""

import re
from typing import List

from models.errors import ValidationError
from utils.arn_utils import parse_arn
from utils.validators import is_valid_cluster_key


def validate_aws_region(region: str) -> str:
    """
    Validate AWS region format.

    Raises:
        ValidationError: If region format is invalid
    """
    if not region:
        raise ValidationError("AWS region cannot be empty")

    pattern = r'^[a-z]{2}(-gov)?-[a-z]+-\d+$'

    if not re.match(pattern, region):
        raise ValidationError(
            f"Invalid AWS region format: {region}. "
            "Expected format: us-east-1, eu-west-1, etc.",
            region=region
        )

    return region


def validate_output_format(format_type: str) -> str:
    """Validate output format."""
    valid_formats = ['table', 'json', 'yaml']

    if format_type not in valid_formats:
        raise ValidationError(
            f"Invalid output format: {format_type}. "
            f"Valid formats: {', '.join(valid_formats)}"
        )

    return format_type


def validate_role_arn(role_arn: str) -> str:
    """
    Validate that an ARN names an IAM role.

    Raises:
        InvalidARNError: If the value is not an ARN
        ValidationError: If the ARN is not an IAM role
    """
    arn = parse_arn(role_arn)
    if arn.service != 'iam' or arn.resource_type != 'role':
        raise ValidationError(f"ARN '{role_arn}' is not an IAM role ARN", arn=role_arn)
    return role_arn


def validate_cluster_key(cluster_key: str) -> str:
    if not cluster_key:
        raise ValidationError("Cluster name or identifier cannot be empty")
    if not is_valid_cluster_key(cluster_key):
        raise ValidationError(
            f"Cluster name, identifier or external identifier '{cluster_key}' isn't valid: "
            "it must contain only letters, digits, dashes and underscores",
            cluster_key=cluster_key
        )
    return cluster_key


def validate_subnet_ids(subnet_ids: List[str]) -> List[str]:
    """
    Validate and de-duplicate subnet identifiers, keeping their order.

    Accepts repeated values and comma separated lists.
    """
    ids: List[str] = []
    for value in subnet_ids:
        for subnet_id in value.split(','):
            subnet_id = subnet_id.strip()
            if not subnet_id:
                continue
            if not re.match(r'^subnet-[0-9a-zA-Z]+$', subnet_id):
                raise ValidationError(f"Invalid subnet ID '{subnet_id}'", subnet_id=subnet_id)
            if subnet_id not in ids:
                ids.append(subnet_id)

    if not ids:
        raise ValidationError("At least one subnet ID is required")
    return ids
