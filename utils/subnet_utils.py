"""
Subnet topology rules: required subnet counts and private/public partitioning.
"""

from dataclasses import replace
from typing import Collection, Iterable, List

from models.errors import AvailabilityZoneCountError, SubnetCountMismatchError, SubnetIsolationError
from models.network import NetworkTopology, Subnet, SubnetClassification


BYOVPC_SINGLE_AZ_SUBNETS_COUNT = 2
BYOVPC_MULTI_AZ_SUBNETS_COUNT = 6
PRIVATE_LINK_SINGLE_AZ_SUBNETS_COUNT = 1
PRIVATE_LINK_MULTI_AZ_SUBNETS_COUNT = 3
HOSTED_PRIVATE_MIN_SUBNETS_COUNT = 1
HOSTED_PUBLIC_MIN_SUBNETS_COUNT = 2

SINGLE_AZ_COUNT = 1
MULTI_AZ_COUNT = 3


def required_subnet_count(multi_az: bool, private_link: bool, hosted_control_plane: bool) -> int:
    """
    Get the subnet count a topology needs.

    Hosted control plane counts are minimums and do not depend on multi_az;
    classic counts are exact.
    """
    if hosted_control_plane:
        return HOSTED_PRIVATE_MIN_SUBNETS_COUNT if private_link else HOSTED_PUBLIC_MIN_SUBNETS_COUNT
    if private_link:
        return PRIVATE_LINK_MULTI_AZ_SUBNETS_COUNT if multi_az else PRIVATE_LINK_SINGLE_AZ_SUBNETS_COUNT
    return BYOVPC_MULTI_AZ_SUBNETS_COUNT if multi_az else BYOVPC_SINGLE_AZ_SUBNETS_COUNT


def validate_subnets_count(multi_az: bool, private_link: bool, hosted_control_plane: bool,
                           subnets_count: int) -> None:
    """
    Validate the number of supplied subnets against the topology.

    Raises:
        SubnetCountMismatchError: With the expected and supplied counts
    """
    topology = NetworkTopology(multi_az, private_link, hosted_control_plane)
    expected = required_subnet_count(multi_az, private_link, hosted_control_plane)

    if hosted_control_plane:
        if subnets_count < expected:
            qualifier = "one" if expected == 1 else "two"
            raise SubnetCountMismatchError(
                f"The number of subnets for a {topology.description} should be at least {qualifier}",
                expected=expected, got=subnets_count, minimum=True
            )
        return

    if subnets_count != expected:
        raise SubnetCountMismatchError(
            f"The number of subnets for a {topology.description} should be {expected}, "
            f"instead received: {subnets_count}",
            expected=expected, got=subnets_count
        )


def validate_availability_zones_count(multi_az: bool, availability_zones_count: int) -> None:
    """Validate the number of availability zones: 3 for multi-AZ, 1 otherwise."""
    expected = MULTI_AZ_COUNT if multi_az else SINGLE_AZ_COUNT
    if availability_zones_count != expected:
        kind = "multi AZ" if multi_az else "single AZ"
        raise AvailabilityZoneCountError(
            f"The number of availability zones for a {kind} cluster should be {expected}, "
            f"instead received: {availability_zones_count}",
            expected=expected, got=availability_zones_count
        )


def classify_subnets(vpc_subnets: Iterable[Subnet], subnet_ids: List[str],
                     private_ids: Collection[str]) -> SubnetClassification:
    """
    Partition the requested subnets into private and public.

    Args:
        vpc_subnets: Every subnet of the VPC holding the first requested subnet
        subnet_ids: Requested subnet identifiers
        private_ids: Identifiers of the VPC subnets that have no internet gateway route

    Returns:
        SubnetClassification holding copies of the matched subnets with
        is_private set; requested ids missing from the VPC are recorded
        in dropped_ids and left out of both partitions
    """
    classification = SubnetClassification(requested_ids=list(subnet_ids))
    matched = set()

    for subnet in vpc_subnets:
        if subnet.subnet_id not in subnet_ids or subnet.subnet_id in matched:
            continue
        matched.add(subnet.subnet_id)
        classified = replace(subnet, is_private=subnet.subnet_id in private_ids)
        if classified.is_private:
            classification.private_subnets.append(classified)
        else:
            classification.public_subnets.append(classified)

    classification.dropped_ids = [sid for sid in subnet_ids if sid not in matched]
    return classification


def validate_isolation(is_private: bool, private_count: int, public_count: int) -> None:
    """
    Validate subnet visibility for a hosted cluster.

    A private cluster must not use public subnets; a public cluster needs at
    least one.
    """
    if is_private:
        if public_count > 0:
            raise SubnetIsolationError(
                "The number of public subnets for a private hosted cluster should be zero",
                is_private, private_count, public_count
            )
    elif public_count == 0:
        raise SubnetIsolationError(
            "The number of public subnets for a public hosted cluster should be at least one",
            is_private, private_count, public_count
        )
