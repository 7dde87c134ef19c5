"""
Subnet classification against live VPC routing.
"""

from typing import List

from models.errors import ValidationError
from models.network import SubnetClassification
from utils.subnet_utils import classify_subnets, validate_isolation, validate_subnets_count


class NetworkValidator:
    """Classifies requested subnets as private or public using AWS routing facts."""

    def __init__(self, aws_client, verbose: bool = False):
        self.aws_client = aws_client
        self.verbose = verbose

    def log(self, message: str):
        """Print verbose logging messages."""
        if self.verbose:
            print(f"[NETWORK] {message}")

    def classify(self, subnet_ids: List[str]) -> SubnetClassification:
        """
        Partition subnets into private and public.

        The VPC is taken from the first subnet. Requested ids that are not in
        that VPC are dropped from the result and listed in dropped_ids.

        Raises:
            ValidationError: If no subnet ids are given
        """
        if not subnet_ids:
            raise ValidationError("At least one subnet id is required")

        vpc_subnets = self.aws_client.get_vpc_subnets(subnet_ids[0])
        requested = [s for s in vpc_subnets if s.subnet_id in subnet_ids]
        private_ids = {s.subnet_id for s in self.aws_client.filter_private_subnets(requested)}

        classification = classify_subnets(vpc_subnets, subnet_ids, private_ids)
        if classification.dropped_ids:
            self.log(f"Ignoring subnets outside the VPC of {subnet_ids[0]}: "
                     f"{', '.join(classification.dropped_ids)}")
        self.log(f"{classification.private_count} private, {classification.public_count} public subnets")
        return classification

    def validate_hosted_cluster_subnets(self, is_private: bool, subnet_ids: List[str]) -> int:
        """
        Validate subnet visibility for a hosted control plane cluster.

        Returns:
            Number of private subnets

        Raises:
            SubnetCountMismatchError: If fewer subnets are given than the hosted
                topology requires (one private, two public)
            SubnetIsolationError: If a private cluster uses public subnets or a
                public cluster has none
        """
        validate_subnets_count(False, is_private, True, len(subnet_ids))
        classification = self.classify(subnet_ids)
        validate_isolation(is_private, classification.private_count, classification.public_count)
        return classification.private_count
