"""
Network topology models: subnets and the subnet counts a cluster topology needs.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any


@dataclass
class Subnet:
    """A VPC subnet as seen by the validation engine."""
    subnet_id: str
    vpc_id: str = ""
    availability_zone: str = ""
    cidr_block: str = ""
    is_private: Optional[bool] = None

    @classmethod
    def from_ec2(cls, data: Dict[str, Any]) -> 'Subnet':
        """Create from an EC2 DescribeSubnets item."""
        return cls(
            subnet_id=data.get('SubnetId', ''),
            vpc_id=data.get('VpcId', ''),
            availability_zone=data.get('AvailabilityZone', ''),
            cidr_block=data.get('CidrBlock', '')
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'subnet_id': self.subnet_id,
            'vpc_id': self.vpc_id,
            'availability_zone': self.availability_zone,
            'cidr_block': self.cidr_block,
            'visibility': self.visibility
        }

    @property
    def visibility(self) -> str:
        if self.is_private is None:
            return 'unknown'
        return 'private' if self.is_private else 'public'


@dataclass
class NetworkTopology:
    """Cluster topology flags that determine the required subnet count."""
    multi_az: bool = False
    private_link: bool = False
    hosted_control_plane: bool = False

    @property
    def description(self) -> str:
        """Human-readable topology name used in messages."""
        if self.hosted_control_plane:
            return "private hosted cluster" if self.private_link else "public hosted cluster"
        az = "multi-AZ" if self.multi_az else "single AZ"
        if self.private_link:
            return f"{az} private link cluster"
        return f"{az} cluster"


@dataclass
class SubnetClassification:
    """
    Result of partitioning a requested set of subnets into private and public.

    `dropped_ids` holds requested identifiers that were not found in the VPC
    of the first subnet; they are excluded from the counts.
    """
    requested_ids: List[str]
    private_subnets: List[Subnet] = field(default_factory=list)
    public_subnets: List[Subnet] = field(default_factory=list)
    dropped_ids: List[str] = field(default_factory=list)

    @property
    def subnets(self) -> List[Subnet]:
        return self.private_subnets + self.public_subnets

    @property
    def private_count(self) -> int:
        return len(self.private_subnets)

    @property
    def public_count(self) -> int:
        return len(self.public_subnets)

    def count_by_availability_zone(self) -> Dict[str, int]:
        """Count matched subnets per availability zone."""
        counts: Dict[str, int] = {}
        for subnet in self.subnets:
            counts[subnet.availability_zone] = counts.get(subnet.availability_zone, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            'requested_ids': self.requested_ids,
            'private_subnets': [s.subnet_id for s in self.private_subnets],
            'public_subnets': [s.subnet_id for s in self.public_subnets],
            'dropped_ids': self.dropped_ids,
            'availability_zones': self.count_by_availability_zone()
        }
