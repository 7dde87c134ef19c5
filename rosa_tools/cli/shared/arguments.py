"""
Common argument parsing utilities for rosa-tools CLI
"""

import argparse

from models.iam import RoleKind


def add_output_args(parser: argparse.ArgumentParser) -> None:
    """Add output formatting arguments to a parser."""
    parser.add_argument(
        '--output', '-o',
        choices=['table', 'json', 'yaml'],
        default='table',
        help='Output format (default: table)'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress non-essential output'
    )


def add_ocm_args(parser: argparse.ArgumentParser) -> None:
    """Add OCM connection arguments to a parser."""
    parser.add_argument(
        '--ocm-url',
        help='OCM API URL (default: $OCM_URL, the OCM config file or https://api.openshift.com)'
    )


def add_cluster_args(parser: argparse.ArgumentParser, required: bool = False) -> None:
    """Add cluster selection arguments to a parser."""
    parser.add_argument(
        '--cluster', '-c',
        required=required,
        help='Name or identifier of the cluster'
    )


def add_topology_args(parser: argparse.ArgumentParser) -> None:
    """Add cluster topology flags to a parser."""
    parser.add_argument(
        '--multi-az',
        action='store_true',
        help='Cluster spans three availability zones'
    )
    parser.add_argument(
        '--private-link',
        action='store_true',
        help='Cluster uses AWS PrivateLink (private hosted cluster with --hosted-cp)'
    )
    parser.add_argument(
        '--hosted-cp',
        action='store_true',
        help='Cluster uses a hosted control plane'
    )


def add_role_args(parser: argparse.ArgumentParser) -> None:
    """Add role link arguments to a parser."""
    parser.add_argument(
        '--role-arn',
        required=True,
        help='ARN of the role to link or unlink'
    )
    parser.add_argument(
        '--role-type',
        choices=[kind.value for kind in RoleKind],
        default=RoleKind.OCM.value,
        help='ocm links to the organization, user links to the current account (default: ocm)'
    )
