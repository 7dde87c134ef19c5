"""
Versions Command for rosa-tools CLI

Lists the STS capable versions of a channel group, resolves policy versions
and validates cluster upgrade targets.
"""

import argparse

from core.operator_roles import find_missing_operator_roles_for_upgrade
from core.upgrades import check_upgrade_cluster_version, get_policy_version, get_versions_list
from models.errors import RosaToolsError, ValidationError
from utils.version_utils import get_version_minor

from ..shared.arguments import add_cluster_args, add_output_args
from ..shared.clients import create_ocm_client
from ..shared.config import load_config
from ..shared.output import OutputFormatter
from ..shared.progress import progress
from ..shared.validation import validate_cluster_key


class VersionsCommand:
    """OpenShift version lookup subcommand."""

    def register_parser(self, subparsers) -> None:
        """Register the versions subcommand parser."""
        parser = subparsers.add_parser(
            'versions',
            help='List versions and validate upgrade targets',
            description='List the minor versions of a channel group that support STS, resolve a policy '
                        'version, or validate an upgrade target for a cluster.'
        )

        version_group = parser.add_argument_group('Version Options')
        version_group.add_argument(
            '--channel-group',
            default='stable',
            help='Channel group (default: stable); an empty value lists every group'
        )
        version_group.add_argument(
            '--policy-version',
            nargs='?',
            const='',
            default=None,
            help='Resolve a policy version; without a value the latest version is used'
        )
        version_group.add_argument(
            '--upgrade-to',
            help='Version to validate as an upgrade target (requires --cluster)'
        )

        cluster_group = parser.add_argument_group('Cluster Options')
        add_cluster_args(cluster_group)

        output_group = parser.add_argument_group('Output Options')
        add_output_args(output_group)

        parser.set_defaults(func=self.execute)

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the versions command."""
        formatter = OutputFormatter(args.output, args.quiet)
        show_progress = not args.quiet and not formatter.machine_readable

        try:
            if args.upgrade_to and not args.cluster:
                raise ValidationError("--upgrade-to requires --cluster")

            ocm_client = create_ocm_client(load_config(args))

            if args.upgrade_to:
                return self._validate_upgrade(args, ocm_client, formatter, show_progress)

            if args.policy_version is not None:
                with progress("Resolving policy version", show_progress):
                    version = get_policy_version(ocm_client, args.policy_version, args.channel_group)
                formatter.print_data({'channel_group': args.channel_group, 'policy_version': version})
                return 0

            with progress(f"Fetching '{args.channel_group}' versions", show_progress):
                versions = get_versions_list(ocm_client, args.channel_group)
            formatter.print_table(
                [{'version': v, 'channel_group': args.channel_group} for v in versions],
                {'version': 'Version', 'channel_group': 'Channel Group'}
            )

        except RosaToolsError as e:
            formatter.print_error(e)
            return 1

        return 0

    def _validate_upgrade(self, args: argparse.Namespace, ocm_client, formatter: OutputFormatter,
                          show_progress: bool) -> int:
        validate_cluster_key(args.cluster)

        with progress(f"Fetching cluster '{args.cluster}'", show_progress) as indicator:
            cluster = ocm_client.get_cluster(args.cluster)
            indicator.step("available upgrades")
            available = ocm_client.get_available_upgrades(cluster.version_id)

        check_upgrade_cluster_version(available, args.upgrade_to, cluster)

        missing = {}
        if cluster.installer_role_arn:
            missing = find_missing_operator_roles_for_upgrade(
                ocm_client, cluster, get_version_minor(args.upgrade_to)
            )

        if formatter.machine_readable:
            formatter.print_data({
                'cluster': cluster.name,
                'current_version': cluster.current_version,
                'upgrade_to': args.upgrade_to,
                'missing_operator_roles': {
                    name: {'name': op.name, 'namespace': op.namespace, 'min_version': op.min_version}
                    for name, op in missing.items()
                }
            })
            return 0

        formatter.print_status(
            f"Cluster '{cluster.name}' can be upgraded from {cluster.current_version} to {args.upgrade_to}",
            'success'
        )
        for name, operator in sorted(missing.items()):
            formatter.print_status(
                f"Operator role for '{operator.namespace}/{operator.name}' ({name}) must be created "
                "before upgrading",
                'warning'
            )
        return 0
