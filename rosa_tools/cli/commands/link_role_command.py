"""
Link Role Commands for rosa-tools CLI

Links or unlinks an OCM role to the current organization, or a user role to
the current account.
"""

import argparse

from core.role_links import RoleLinkRegistry
from models.errors import NotFoundError, RosaToolsError
from models.iam import RoleKind

from ..shared.arguments import add_output_args, add_role_args
from ..shared.clients import create_ocm_client
from ..shared.config import load_config
from ..shared.output import OutputFormatter
from ..shared.validation import validate_role_arn


def resolve_owner_id(ocm_client, kind: RoleKind) -> str:
    """Get the organization (OCM roles) or account (user roles) of the logged in user."""
    if kind == RoleKind.OCM:
        org_id, _ = ocm_client.get_current_organization()
        return org_id

    account = ocm_client.get_current_account()
    if not account:
        raise NotFoundError("Current account not found")
    return account.get('id', '')


class LinkRoleCommand:
    """Role linking subcommand."""

    def register_parser(self, subparsers) -> None:
        """Register the link-role subcommand parser."""
        parser = subparsers.add_parser(
            'link-role',
            help='Link an OCM or user role',
            description='Link an OCM role to the current organization or a user role to the current account. '
                        'Only one OCM role can be linked per AWS account per organization.'
        )
        add_role_args(parser)
        add_output_args(parser)
        parser.set_defaults(func=self.execute)

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the link-role command."""
        formatter = OutputFormatter(args.output, args.quiet)
        kind = RoleKind(args.role_type)

        try:
            validate_role_arn(args.role_arn)
            ocm_client = create_ocm_client(load_config(args))
            owner_id = resolve_owner_id(ocm_client, kind)
            linked = RoleLinkRegistry(ocm_client).link(kind, owner_id, args.role_arn)
        except RosaToolsError as e:
            formatter.print_error(e)
            return 1

        if formatter.machine_readable:
            formatter.print_data({'role_arn': args.role_arn, 'owner_id': owner_id, 'linked': linked})
        elif linked:
            formatter.print_status(f"Successfully linked role-arn '{args.role_arn}' with '{owner_id}'", 'success')
        else:
            formatter.print_status(f"Role-arn '{args.role_arn}' is already linked with '{owner_id}'", 'info')
        return 0


class UnlinkRoleCommand:
    """Role unlinking subcommand."""

    def register_parser(self, subparsers) -> None:
        """Register the unlink-role subcommand parser."""
        parser = subparsers.add_parser(
            'unlink-role',
            help='Unlink an OCM or user role',
            description='Remove a linked role. The label is deleted when its last role is removed.'
        )
        add_role_args(parser)
        add_output_args(parser)
        parser.set_defaults(func=self.execute)

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the unlink-role command."""
        formatter = OutputFormatter(args.output, args.quiet)
        kind = RoleKind(args.role_type)

        try:
            validate_role_arn(args.role_arn)
            ocm_client = create_ocm_client(load_config(args))
            owner_id = resolve_owner_id(ocm_client, kind)
            RoleLinkRegistry(ocm_client).unlink(kind, owner_id, args.role_arn)
        except RosaToolsError as e:
            formatter.print_error(e)
            return 1

        if formatter.machine_readable:
            formatter.print_data({'role_arn': args.role_arn, 'owner_id': owner_id, 'unlinked': True})
        else:
            formatter.print_status(f"Successfully unlinked role-arn '{args.role_arn}' from '{owner_id}'", 'success')
        return 0
