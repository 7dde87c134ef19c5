"""
Verify Operator Roles Command for rosa-tools CLI

Checks that existing operator roles trust a cluster's OIDC provider and that
their policies support the cluster version.
"""

import argparse

from core.operator_roles import validate_operator_roles_match_oidc_provider
from models.errors import RosaToolsError, ValidationError
from models.iam import OperatorIAMRole
from utils.arn_utils import get_path_from_arn

from ..shared.arguments import add_cluster_args, add_output_args
from ..shared.clients import create_aws_client, create_ocm_client
from ..shared.config import load_config
from ..shared.output import OutputFormatter
from ..shared.validation import validate_cluster_key, validate_role_arn


class VerifyOperatorRolesCommand:
    """Operator role verification subcommand."""

    def register_parser(self, subparsers) -> None:
        """Register the verify-operator-roles subcommand parser."""
        parser = subparsers.add_parser(
            'verify-operator-roles',
            help='Verify operator roles against an OIDC provider',
            description='Validate operator role paths, trust relationships to the OIDC issuer and '
                        'policy versions, stopping at the first incompatible role.'
        )

        cluster_group = parser.add_argument_group('Cluster Options')
        add_cluster_args(cluster_group)

        role_group = parser.add_argument_group('Role Options (without --cluster)')
        role_group.add_argument(
            '--role-arns',
            nargs='+',
            default=[],
            help='Operator role ARNs to verify'
        )
        role_group.add_argument(
            '--oidc-endpoint-url',
            help='OIDC endpoint URL the roles must trust'
        )
        role_group.add_argument(
            '--cluster-version',
            help='OpenShift version the policies must support'
        )
        role_group.add_argument(
            '--installer-role-arn',
            help='Installer role ARN; its path is the expected operator role path'
        )

        output_group = parser.add_argument_group('Output Options')
        add_output_args(output_group)

        parser.set_defaults(func=self.execute)

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the verify-operator-roles command."""
        formatter = OutputFormatter(args.output, args.quiet)

        try:
            config = load_config(args)
            aws_client = create_aws_client(config)

            if args.cluster:
                validate_cluster_key(args.cluster)
                cluster = create_ocm_client(config).get_cluster(args.cluster)
                roles = cluster.operator_iam_roles
                oidc_endpoint_url = cluster.oidc_endpoint_url
                cluster_version = cluster.current_version
                installer_role_arn = cluster.installer_role_arn
            else:
                if not args.role_arns or not args.oidc_endpoint_url or not args.cluster_version:
                    raise ValidationError(
                        "Either --cluster or --role-arns, --oidc-endpoint-url and --cluster-version are required"
                    )
                roles = [
                    OperatorIAMRole(name="", namespace="", role_arn=validate_role_arn(arn))
                    for arn in args.role_arns
                ]
                oidc_endpoint_url = args.oidc_endpoint_url
                cluster_version = args.cluster_version
                installer_role_arn = args.installer_role_arn

            if not roles:
                formatter.print_status("No operator roles to verify", 'warning')
                return 0
            if not oidc_endpoint_url:
                raise ValidationError("Cluster has no OIDC endpoint URL")

            if installer_role_arn:
                validate_role_arn(installer_role_arn)
                expected_path = get_path_from_arn(installer_role_arn)
                account_roles_managed = aws_client.has_managed_policies(installer_role_arn)
            else:
                expected_path = "/"
                account_roles_managed = False

            validate_operator_roles_match_oidc_provider(
                formatter, aws_client, roles, oidc_endpoint_url, cluster_version,
                expected_path, account_roles_managed
            )

        except RosaToolsError as e:
            formatter.print_error(e)
            return 1

        if formatter.machine_readable:
            formatter.print_data({
                'verified_roles': [role.role_arn for role in roles],
                'oidc_endpoint_url': oidc_endpoint_url,
                'cluster_version': cluster_version
            })
        else:
            formatter.print_status(f"{len(roles)} operator roles are compatible", 'success')
        return 0
