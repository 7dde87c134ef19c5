"""
Disk Size Command for rosa-tools CLI

Converts a machine pool root disk size to the gibibytes sent to AWS.
"""

import argparse

from models.errors import RosaToolsError
from utils.disk_size_utils import SUFFIX_ERROR, parse_disk_size_to_gibibyte

from ..shared.arguments import add_output_args
from ..shared.output import OutputFormatter


class DiskSizeCommand:
    """Root disk size parsing subcommand."""

    def register_parser(self, subparsers) -> None:
        """Register the disk-size subcommand parser."""
        parser = subparsers.add_parser(
            'disk-size',
            help='Parse a machine pool root disk size',
            description=f'Convert a root disk size such as "300GiB" or "1 TB" to gibibytes. {SUFFIX_ERROR}.'
        )

        parser.add_argument(
            'size',
            help='Disk size with a unit suffix (quote sizes that contain spaces)'
        )

        add_output_args(parser)
        parser.set_defaults(func=self.execute)

    def execute(self, args: argparse.Namespace) -> int:
        """Execute the disk-size command."""
        formatter = OutputFormatter(args.output, args.quiet)

        try:
            gibibytes = parse_disk_size_to_gibibyte(args.size)
        except RosaToolsError as e:
            formatter.print_error(e)
            return 1

        if formatter.machine_readable:
            formatter.print_data({'input': args.size, 'gibibytes': gibibytes})
        elif gibibytes == 0:
            formatter.print_status("Disk size is unset, the default size will be used", 'success')
        else:
            formatter.print_status(f"{args.size} = {gibibytes} GiB", 'success')
        return 0
