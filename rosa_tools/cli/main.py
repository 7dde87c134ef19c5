#!/usr/bin/env python3
"""
ROSA Tools - Unified CLI Entry Point

Subcommands:
- disk-size: Machine pool root disk size parsing
- verify-subnets: Subnet count and visibility checks
- verify-operator-roles: Operator role trust and policy checks
- versions: Channel group versions and upgrade targets
- link-role / unlink-role: OCM and user role links
- version: Version information
"""

import sys
import argparse

from models.errors import RosaToolsError

from .commands.disk_size_command import DiskSizeCommand
from .commands.link_role_command import LinkRoleCommand, UnlinkRoleCommand
from .commands.verify_operator_roles_command import VerifyOperatorRolesCommand
from .commands.verify_subnets_command import VerifySubnetsCommand
from .commands.version_command import VersionCommand
from .commands.versions_command import VersionsCommand
from .shared.arguments import add_ocm_args


class RosaToolsCLI:
    """Main CLI dispatcher for rosa-tools."""

    def __init__(self):
        """Initialize the CLI with all available commands."""
        self.commands = {
            'disk-size': DiskSizeCommand(),
            'verify-subnets': VerifySubnetsCommand(),
            'verify-operator-roles': VerifyOperatorRolesCommand(),
            'versions': VersionsCommand(),
            'link-role': LinkRoleCommand(),
            'unlink-role': UnlinkRoleCommand(),
            'version': VersionCommand()
        }

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser with subcommands."""
        parser = argparse.ArgumentParser(
            prog='rosa-tools',
            description='Pre-flight validation for ROSA clusters and their AWS identity setup',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  rosa-tools disk-size 300GiB
  rosa-tools verify-subnets --subnet-ids subnet-1 subnet-2 --offline
  rosa-tools verify-operator-roles --cluster my-cluster
  rosa-tools versions --channel-group candidate
  rosa-tools versions --cluster my-cluster --upgrade-to 4.14.8
  rosa-tools link-role --role-arn arn:aws:iam::123456789012:role/ManagedOpenShift-OCM-Role
  rosa-tools version
            """
        )

        # Global options
        parser.add_argument('--verbose', '-v', action='store_true',
                            help='Enable verbose output')
        parser.add_argument('--profile', '--aws-profile',
                            help='AWS profile to use (default: $AWS_PROFILE or the default profile)')
        parser.add_argument('--region', '--aws-region',
                            help='AWS region (default: $AWS_REGION or the profile region)')
        add_ocm_args(parser)

        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='COMMAND'
        )

        for command in self.commands.values():
            command.register_parser(subparsers)

        return parser

    def dispatch_command(self, args: argparse.Namespace) -> int:
        """Dispatch to the appropriate command handler."""
        if not args.command:
            print("Error: No command specified. Use --help for usage information.")
            return 1

        command = self.commands.get(args.command)
        if not command:
            print(f"Error: Unknown command '{args.command}'")
            return 1

        try:
            return command.execute(args)
        except KeyboardInterrupt:
            print("\nOperation cancelled by user.")
            return 130
        except (RosaToolsError, ValueError) as e:
            if args.verbose:
                import traceback
                traceback.print_exc()
            else:
                print(f"Error: {e}")
            return 1

    def run(self, argv=None) -> int:
        """Run the CLI with the given arguments."""
        parser = self.create_parser()
        args = parser.parse_args(argv)
        return self.dispatch_command(args)


def main() -> int:
    """Main entry point for the rosa-tools command."""
    cli = RosaToolsCLI()
    return cli.run()


if __name__ == '__main__':
    sys.exit(main())
