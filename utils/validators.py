"""
Reusable input validators for command-line and interactive input.

Validators are typed by the kind of value they check: string validators take
a str, boolean validators a bool and selection validators the list of chosen
options. Every validator returns None on success and raises a
RosaToolsError subclass describing the failure. Empty strings pass the
string validators; use `required` to reject them.
"""

import ipaddress
import os
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Sequence, TypeVar
from urllib.parse import urlparse

from cryptography import x509

from models.errors import RosaToolsError, ValidationError
from utils.disk_size_utils import parse_disk_size_to_gibibyte
from utils.subnet_utils import validate_availability_zones_count, validate_subnets_count


@dataclass(frozen=True)
class ValidationPatterns:
    """Regular expressions shared by the validators, compiled once at import."""
    # Identifiers or names safe to embed in an OCM search query
    cluster_key: Pattern = re.compile(r"^(\w|-)+$")
    # DNS-1035 label of at most 15 characters
    cluster_name: Pattern = re.compile(r"^[a-z]([-a-z0-9]{0,13}[a-z0-9])?$")
    kubernetes_label: Pattern = re.compile(r"^[a-z0-9A-Z]+[-_.a-z0-9A-Z/]*$")
    bad_username: Pattern = re.compile(r"^(~|\.?\.|.*[:/%].*)$")
    cert_extension: Pattern = re.compile(r"\.(pem|ca-bundle|ce?rt?|key)$")


PATTERNS = ValidationPatterns()

MAX_CLUSTER_NAME_LENGTH = 15
MAX_LABEL_LENGTH = 63
HTTP_TOKENS_VALUES = ("required", "optional")
# Empty quoted value left behind by some shells
DOUBLE_QUOTES = '""'

StringValidator = Callable[[str], None]
BoolValidator = Callable[[bool], None]
SelectionValidator = Callable[[Sequence[str]], None]

T = TypeVar('T')


def compose(validators: List[Callable[[T], None]]) -> Callable[[T], None]:
    """Combine validators for one field; they run in order and the first failure wins."""
    def validate(value: T) -> None:
        for validator in validators:
            validator(value)
    return validate


def required(value: Optional[str]) -> None:
    if value is None or not str(value).strip():
        raise ValidationError("Value is required")


def max_length(length: int) -> StringValidator:
    def validate(value: str) -> None:
        if value and len(value) > length:
            raise ValidationError(
                f"Value is too long, maximum length is {length} characters", max_length=length
            )
    return validate


def _parse_url(value: Optional[str]):
    if not value:
        return None
    parsed = urlparse(value)
    if " " in value or not (parsed.scheme or value.startswith("/")):
        raise ValidationError(f"Invalid URL '{value}'", value=value)
    if parsed.scheme and not (parsed.netloc or parsed.path):
        raise ValidationError(f"Invalid URL '{value}'", value=value)
    return parsed


def is_url(value: Optional[str]) -> None:
    """Validate an absolute URL or absolute path."""
    _parse_url(value)


def is_url_https(value: Optional[str]) -> None:
    parsed = _parse_url(value)
    if parsed is not None and parsed.scheme != "https":
        raise ValidationError(f"Expect URL '{value}' to use an 'https://' scheme", value=value)


def is_cert(filepath: Optional[str]) -> None:
    """Validate that a path names an existing certificate or key file."""
    if not filepath or filepath == DOUBLE_QUOTES:
        return
    if not PATTERNS.cert_extension.search(filepath):
        raise ValidationError(f"file '{filepath}' does not have a valid file extension", path=filepath)
    if not os.path.exists(filepath):
        raise ValidationError(f"file '{filepath}' does not exist on the file system", path=filepath)


def is_cidr(value: str) -> None:
    """Validate CIDR notation such as 10.0.0.0/16."""
    if not value or "/" not in value:
        raise ValidationError(f"invalid CIDR address: {value}", value=value)
    try:
        ipaddress.ip_network(value, strict=False)
    except ValueError as e:
        raise ValidationError(f"invalid CIDR address: {value}: {e}", value=value)


def reg_exp(pattern: str) -> StringValidator:
    regex = re.compile(pattern)

    def validate(value: str) -> None:
        if not value:
            return
        if not regex.search(value):
            raise ValidationError(
                f"{value} does not match regular expression {regex.pattern}", value=value
            )
    return validate


def reg_exp_boolean(pattern: str) -> BoolValidator:
    regex = re.compile(pattern)

    def validate(value: bool) -> None:
        if not isinstance(value, bool):
            raise ValidationError(f"can only validate boolean values, got {value!r}")
        text = "true" if value else "false"
        if not regex.search(text):
            raise ValidationError(
                f"{text} does not match regular expression {regex.pattern}", value=text
            )
    return validate


def subnets_count_validator(multi_az: bool, private_link: bool, hosted_cp: bool) -> SelectionValidator:
    """Validate the number of selected subnets against the cluster topology."""
    def validate(answers: Sequence[str]) -> None:
        validate_subnets_count(multi_az, private_link, hosted_cp, len(answers))
    return validate


def availability_zones_count_validator(multi_az: bool) -> SelectionValidator:
    def validate(answers: Sequence[str]) -> None:
        validate_availability_zones_count(multi_az, len(answers))
    return validate


def machine_pool_root_disk_size_validator(value: str) -> None:
    """Validate a root disk size string such as '300GiB'."""
    try:
        parse_disk_size_to_gibibyte(value)
    except RosaToolsError as e:
        raise ValidationError(f"failed to parse machine pool root disk size: {e}", value=value)


def is_valid_cluster_key(cluster_key: str) -> bool:
    return bool(PATTERNS.cluster_key.match(cluster_key))


def is_valid_cluster_name(cluster_name: str) -> bool:
    return bool(PATTERNS.cluster_name.match(cluster_name))


def is_valid_username(username: str) -> bool:
    return not PATTERNS.bad_username.match(username)


def cluster_name_validator(name: str) -> None:
    if not is_valid_cluster_name(name.strip(" \t")):
        raise ValidationError(
            f"Cluster name must consist of no more than {MAX_CLUSTER_NAME_LENGTH} lowercase "
            "alphanumeric characters or '-', start with a letter, and end with an "
            "alphanumeric character.",
            value=name
        )


def validate_http_proxy(value: str) -> None:
    if not value:
        return
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValidationError(f"Invalid http-proxy value '{value}'", value=value)
    if parsed.scheme != "http":
        raise ValidationError("Expected http-proxy to have an http:// scheme", value=value)


def validate_additional_trust_bundle(filepath: str) -> None:
    """Validate that a file holds at least one PEM encoded certificate."""
    if not filepath:
        return
    try:
        with open(filepath, 'rb') as f:
            content = f.read()
    except OSError as e:
        raise ValidationError(f"Failed to read trust bundle file '{filepath}': {e}", path=filepath)
    if not content.strip():
        raise ValidationError("Trust bundle file is empty", path=filepath)
    try:
        x509.load_pem_x509_certificates(content)
    except ValueError:
        raise ValidationError("Failed to parse additional trust bundle", path=filepath)


def validate_http_tokens_value(value: str) -> None:
    if not value:
        return
    if value not in HTTP_TOKENS_VALUES:
        raise ValidationError(
            "ec2-metadata-http-tokens value should be one of "
            f"'{HTTP_TOKENS_VALUES[0]}', '{HTTP_TOKENS_VALUES[1]}'",
            value=value
        )


def validate_balancing_ignored_labels(value: str) -> None:
    """Validate a comma separated list of Kubernetes label keys."""
    for label in value.split(","):
        if not label:
            continue
        if len(label) > MAX_LABEL_LENGTH:
            raise ValidationError(
                f"label key '{label}' has exceeded allowed label length of {MAX_LABEL_LENGTH} characters",
                value=label
            )
        if not PATTERNS.kubernetes_label.match(label):
            raise ValidationError(
                f"label '{label}' is not a valid Kubernetes label key. "
                "It must start with an alphanumeric character and may additionally contain only "
                "forward-slashes, dashes, underscores, and dots",
                value=label
            )
