"""
Verify Subnets Command for rosa-tools CLI

Checks a set of subnets against the topology of the cluster they are meant for.
"""

import argparse

from core.network_validator import NetworkValidator
from models.errors import RosaToolsError
from models.network import NetworkTopology
from utils.subnet_utils import (
    required_subnet_count,
    validate_availability_zones_count,
    validate_isolation,
    validate_subnets_count,
)

from ..shared.arguments import add_output_args, add_topology_args
from ..shared.clients import create_aws_client
from ..shared.config import load_config
from ..shared.output import OutputFormatter
from ..shared.progress import progress
from ..shared.validation import validate_subnet_ids


class VerifySubnetsCommand:
    """Subnet topology verification subcommand."""

    def register_parser(self, subparsers) -> None:
        """Register the verify-subnets subcommand parser."""
        parser = subparsers.add_parser(
            'verify-subnets',
            help='Verify subnets against a cluster topology',
            description='Check the subnet count for a cluster topology and, using the VPC route tables, '
                        'which of the subnets are private or public.'
        )

        subnet_group = parser.add_argument_group('Subnet Options')
        subnet_group.add_argument(
            '--subnet-ids',
            nargs='+',
            required=True,
            help='Subnet IDs, space or comma separated'
        )
        subnet_group.add_argument(
            '--offline',
            action='store_true',
            help='Only check the subnet count, without AWS lookups'
        )

        topology_group = parser.add_argument_group('Topology Options')
        add_topology_args(topology_group)

        output_group = parser.add_argument_group('Output Options')
        add_output_args(output_group)

        parser.set_defaults(func=self.execute)

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the verify-subnets command."""
        formatter = OutputFormatter(args.output, args.quiet)
        topology = NetworkTopology(args.multi_az, args.private_link, args.hosted_cp)

        try:
            subnet_ids = validate_subnet_ids(args.subnet_ids)
            validate_subnets_count(args.multi_az, args.private_link, args.hosted_cp, len(subnet_ids))
            if not formatter.machine_readable:
                formatter.print_status(
                    f"{len(subnet_ids)} subnets fit a {topology.description} "
                    f"(requires {'at least ' if args.hosted_cp else ''}"
                    f"{required_subnet_count(args.multi_az, args.private_link, args.hosted_cp)})",
                    'info'
                )

            if args.offline:
                if formatter.machine_readable:
                    formatter.print_data({'subnet_ids': subnet_ids, 'topology': topology.description})
                else:
                    formatter.print_status("Subnet count is valid", 'success')
                return 0

            config = load_config(args)
            validator = NetworkValidator(create_aws_client(config), verbose=config.verbose)

            with progress("Classifying subnets", not args.quiet and not formatter.machine_readable):
                classification = validator.classify(subnet_ids)

            formatter.print_subnet_classification(classification)

            if args.hosted_cp:
                validate_isolation(args.private_link, classification.private_count, classification.public_count)
            else:
                zones = classification.count_by_availability_zone()
                validate_availability_zones_count(args.multi_az, len(zones))

        except RosaToolsError as e:
            formatter.print_error(e)
            return 1

        if not formatter.machine_readable:
            formatter.print_status(f"Subnets are valid for a {topology.description}", 'success')
        return 0
