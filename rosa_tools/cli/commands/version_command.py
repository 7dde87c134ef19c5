"""
Version Command for rosa-tools CLI
"""

import argparse
import platform
from importlib import metadata
from typing import Any, Dict, List

from rosa_tools import __version__

from ..shared.arguments import add_output_args
from ..shared.config import load_config
from ..shared.output import OutputFormatter


# Installed distributions reported with --verbose
DISTRIBUTIONS = ("boto3", "botocore", "requests", "PyYAML", "tabulate", "cryptography")


def installed_versions() -> List[Dict[str, str]]:
    versions = []
    for name in DISTRIBUTIONS:
        try:
            version = metadata.version(name)
        except metadata.PackageNotFoundError:
            version = "not installed"
        versions.append({'name': name, 'version': version})
    return versions


class VersionCommand:
    """Version information command."""

    def register_parser(self, subparsers) -> None:
        parser = subparsers.add_parser(
            'version',
            help='Show version information',
            description='Display the rosa-tools version and, with --verbose, the libraries and '
                        'endpoints it would use.'
        )
        add_output_args(parser)
        parser.set_defaults(func=self.execute)

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the version command."""
        formatter = OutputFormatter(args.output, args.quiet)
        info: Dict[str, Any] = {'rosa_tools': {'version': __version__}}

        if args.verbose:
            config = load_config(args)
            info['python'] = platform.python_version()
            info['ocm_url'] = config.ocm_url
            info['aws_region'] = config.aws_region or ''
            info['components'] = installed_versions()

        if formatter.machine_readable:
            formatter.print_data(info)
            return 0

        print(f"rosa-tools {__version__}")
        if args.verbose:
            print(f"Python {info['python']}, OCM {info['ocm_url']}")
            formatter.print_table(info['components'], {'name': 'Library', 'version': 'Version'})
        return 0
