"""
AWS client for the IAM and EC2 lookups the validators need.
"""

import boto3
from typing import Dict, List, Optional, Any
from dataclasses import dataclass
from botocore.exceptions import ClientError, NoCredentialsError, BotoCoreError

from models.errors import ForbiddenError, NotFoundError, RemoteServiceError
from models.iam import AttachedPolicy, IAMRole, PolicyType
from models.network import Subnet
from utils.arn_utils import get_resource_name
from utils.version_utils import VersionParser


MANAGED_POLICIES_TAG = "rosa_managed_policies"
OPENSHIFT_VERSION_TAG = "rosa_openshift_version"

NOT_FOUND_CODES = ("NoSuchEntity", "InvalidSubnetID.NotFound", "InvalidVpcID.NotFound")
FORBIDDEN_CODES = ("AccessDenied", "AccessDeniedException", "UnauthorizedOperation")


@dataclass
class AccessKey:
    """Static AWS credentials used when no role ARN is supplied."""
    access_key_id: str
    secret_access_key: str


def map_client_error(e: ClientError, action: str) -> Exception:
    """Translate a botocore ClientError into the matching RosaToolsError."""
    error = e.response.get('Error', {})
    code = error.get('Code', '')
    message = error.get('Message', '') or str(e)
    if code in NOT_FOUND_CODES:
        return NotFoundError(f"{action}: {message}", code=code)
    if code in FORBIDDEN_CODES:
        return ForbiddenError(f"{action}: {message}", code=code)
    status = e.response.get('ResponseMetadata', {}).get('HTTPStatusCode')
    return RemoteServiceError(f"{action}: {message}", status=status, code=code)


class AWSClient:
    """AWS IAM and EC2 client."""

    def __init__(self, profile: str = None, region: str = None, verbose: bool = False):
        """
        Initialize AWS clients.

        Args:
            profile: AWS profile to use
            region: AWS region
            verbose: Enable verbose logging
        """
        self.verbose = verbose

        try:
            if profile:
                self.session = boto3.Session(profile_name=profile, region_name=region)
            else:
                self.session = boto3.Session(region_name=region)
            self.iam_client = self.session.client('iam')
            self.ec2_client = self.session.client('ec2', region_name=region)
            self.region = region or self.session.region_name

        except NoCredentialsError:
            raise RemoteServiceError("AWS credentials not found. Please configure your credentials.")
        except BotoCoreError as e:
            raise RemoteServiceError(f"Failed to initialize AWS clients: {e}")

    def log(self, message: str):
        """Print verbose logging messages."""
        if self.verbose:
            print(f"[AWS-CLIENT] {message}")

    def get_role_by_arn(self, role_arn: str) -> IAMRole:
        """
        Get a live IAM role.

        Args:
            role_arn: ARN of the role

        Returns:
            IAMRole with its trust policy document and tags

        Raises:
            NotFoundError: If the role does not exist
        """
        role_name = get_resource_name(role_arn)
        try:
            self.log(f"Getting role {role_name}")
            response = self.iam_client.get_role(RoleName=role_name)
            role = IAMRole.from_iam(response['Role'])

            if not role.tags:
                tags = self.iam_client.list_role_tags(RoleName=role_name).get('Tags', [])
                role.tags = {t['Key']: t['Value'] for t in tags}
            return role

        except ClientError as e:
            raise map_client_error(e, f"Failed to get role '{role_arn}'")

    def get_attached_policies(self, role_name: str) -> List[AttachedPolicy]:
        """
        List the policies of a role, managed (attached) and inline.

        Args:
            role_name: Name of the role

        Returns:
            List of AttachedPolicy, attached policies first
        """
        policies = []
        try:
            self.log(f"Listing policies for role {role_name}")
            paginator = self.iam_client.get_paginator('list_attached_role_policies')
            for page in paginator.paginate(RoleName=role_name):
                for policy in page.get('AttachedPolicies', []):
                    policies.append(AttachedPolicy(
                        policy_name=policy['PolicyName'],
                        policy_type=PolicyType.ATTACHED,
                        policy_arn=policy['PolicyArn']
                    ))

            paginator = self.iam_client.get_paginator('list_role_policies')
            for page in paginator.paginate(RoleName=role_name):
                for policy_name in page.get('PolicyNames', []):
                    policies.append(AttachedPolicy(
                        policy_name=policy_name,
                        policy_type=PolicyType.INLINE
                    ))

        except ClientError as e:
            raise map_client_error(e, f"Failed to list policies for role '{role_name}'")

        self.log(f"Found {len(policies)} policies for role {role_name}")
        return policies

    def has_managed_policies(self, role_arn: str) -> bool:
        """Check whether a role is tagged as using service-managed policies."""
        role = self.get_role_by_arn(role_arn)
        return role.tags.get(MANAGED_POLICIES_TAG, "").lower() == "true"

    def is_policy_compatible(self, policy_arn: str, version: str) -> bool:
        """
        Check whether a customer policy supports a cluster version.

        The policy is compatible when its OpenShift version tag is at least
        the cluster's minor version. An untagged policy is incompatible.
        """
        try:
            self.log(f"Checking policy {policy_arn} against version {version}")
            response = self.iam_client.list_policy_tags(PolicyArn=policy_arn)
        except ClientError as e:
            raise map_client_error(e, f"Failed to get tags for policy '{policy_arn}'")

        tags = {t['Key']: t['Value'] for t in response.get('Tags', [])}
        policy_version = tags.get(OPENSHIFT_VERSION_TAG)
        if not policy_version:
            self.log(f"Policy {policy_arn} has no {OPENSHIFT_VERSION_TAG} tag")
            return False

        tagged = VersionParser.try_parse_version(policy_version)
        if tagged is None:
            return False
        cluster_minor = VersionParser.parse_version(VersionParser.parse_minor(version))
        return tagged >= cluster_minor

    def get_vpc_subnets(self, subnet_id: str) -> List[Subnet]:
        """
        Get every subnet of the VPC that holds a subnet.

        Args:
            subnet_id: Any subnet of the VPC

        Returns:
            List of Subnet in the order EC2 returns them
        """
        try:
            self.log(f"Resolving VPC of subnet {subnet_id}")
            response = self.ec2_client.describe_subnets(SubnetIds=[subnet_id])
            found = response.get('Subnets', [])
            if not found:
                raise NotFoundError(f"Subnet '{subnet_id}' not found", subnet_id=subnet_id)
            vpc_id = found[0]['VpcId']

            subnets = []
            paginator = self.ec2_client.get_paginator('describe_subnets')
            for page in paginator.paginate(Filters=[{'Name': 'vpc-id', 'Values': [vpc_id]}]):
                subnets.extend(Subnet.from_ec2(s) for s in page.get('Subnets', []))

            self.log(f"VPC {vpc_id} has {len(subnets)} subnets")
            return subnets

        except ClientError as e:
            raise map_client_error(e, f"Failed to get subnets for VPC of '{subnet_id}'")

    def _get_route_tables(self, vpc_id: str) -> List[Dict[str, Any]]:
        try:
            tables = []
            paginator = self.ec2_client.get_paginator('describe_route_tables')
            for page in paginator.paginate(Filters=[{'Name': 'vpc-id', 'Values': [vpc_id]}]):
                tables.extend(page.get('RouteTables', []))
            return tables
        except ClientError as e:
            raise map_client_error(e, f"Failed to get route tables for VPC '{vpc_id}'")

    @staticmethod
    def _route_table_for_subnet(route_tables: List[Dict[str, Any]],
                                subnet_id: str) -> Optional[Dict[str, Any]]:
        main_table = None
        for table in route_tables:
            for association in table.get('Associations', []):
                if association.get('SubnetId') == subnet_id:
                    return table
                if association.get('Main'):
                    main_table = table
        return main_table

    @staticmethod
    def _is_public_route_table(table: Optional[Dict[str, Any]]) -> bool:
        if table is None:
            return False
        for route in table.get('Routes', []):
            if route.get('GatewayId', '').startswith('igw'):
                return True
        return False

    def filter_private_subnets(self, subnets: List[Subnet]) -> List[Subnet]:
        """
        Keep the subnets whose route table has no internet gateway route.

        A subnet without an explicit route table association uses the main
        route table of its VPC.
        """
        if not subnets:
            return []

        tables_by_vpc: Dict[str, List[Dict[str, Any]]] = {}
        private = []
        for subnet in subnets:
            if subnet.vpc_id not in tables_by_vpc:
                tables_by_vpc[subnet.vpc_id] = self._get_route_tables(subnet.vpc_id)
            table = self._route_table_for_subnet(tables_by_vpc[subnet.vpc_id], subnet.subnet_id)
            if not self._is_public_route_table(table):
                private.append(subnet)

        self.log(f"{len(private)} of {len(subnets)} subnets are private")
        return private

    def get_access_keys(self) -> AccessKey:
        """
        Get the static credentials of the current session.

        Raises:
            RemoteServiceError: If the session has no credentials
        """
        credentials = self.session.get_credentials()
        if credentials is None:
            raise RemoteServiceError("AWS credentials not found. Please configure your credentials.")
        frozen = credentials.get_frozen_credentials()
        return AccessKey(access_key_id=frozen.access_key, secret_access_key=frozen.secret_key)
