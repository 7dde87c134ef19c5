"""
Output formatting utilities for rosa-tools CLI
"""

import json
import sys
import yaml
from typing import Any, Dict, List, Optional
from tabulate import tabulate

from models.errors import RosaToolsError
from models.network import SubnetClassification


class OutputFormatter:
    """Handles consistent output formatting across all commands."""

    def __init__(self, format_type: str = 'table', quiet: bool = False, interactive: Optional[bool] = None):
        """
        Initialize the output formatter.

        Args:
            format_type: Output format ('table', 'json', 'yaml')
            quiet: Whether to suppress non-essential output
            interactive: Whether stdout is a terminal (detected when None)
        """
        self.format_type = format_type
        self.quiet = quiet
        self.interactive = sys.stdout.isatty() if interactive is None else interactive

    @property
    def machine_readable(self) -> bool:
        return self.format_type != 'table'

    def print_status(self, message: str, level: str = 'info') -> None:
        """Print status messages unless in quiet mode."""
        if self.quiet and level == 'info':
            return

        prefix = {
            'info': 'ℹ',
            'success': '✓',
            'warning': '⚠',
            'error': '✗'
        }.get(level, '')

        print(f"{prefix} {message}" if prefix else message)

    def narrate(self, message: str) -> None:
        """Print progress narration on an interactive terminal with table output."""
        if self.interactive and not self.machine_readable:
            self.print_status(message, 'info')

    def print_error(self, error: Exception) -> None:
        """Print an error, as a structured document for machine-readable formats."""
        if self.machine_readable and isinstance(error, RosaToolsError):
            self.print_data({'error': error.to_dict()})
        else:
            self.print_status(str(error), 'error')

    def print_data(self, data: Any) -> None:
        """Print data in the selected format; table output falls back to key/value rows."""
        if self.format_type == 'json':
            self._print_json(data)
        elif self.format_type == 'yaml':
            self._print_yaml(data)
        elif isinstance(data, dict):
            rows = [[key, self._cell(value)] for key, value in data.items()]
            print(tabulate(rows, headers=['Property', 'Value'], tablefmt='grid'))
        else:
            print(data)

    def print_table(self, rows: List[Dict[str, Any]], headers: Dict[str, str]) -> None:
        """
        Print a list of records.

        Args:
            rows: Records to print
            headers: Record key to column title, in column order
        """
        if self.format_type == 'json':
            self._print_json(rows)
        elif self.format_type == 'yaml':
            self._print_yaml(rows)
        elif not rows:
            if not self.quiet:
                print("No results found.")
        else:
            table = [[self._cell(row.get(key, '')) for key in headers] for row in rows]
            print(tabulate(table, headers=list(headers.values()), tablefmt='grid'))

    def print_subnet_classification(self, classification: SubnetClassification) -> None:
        """Print subnet visibility results."""
        if self.machine_readable:
            self.print_data(classification.to_dict())
            return

        rows = [
            [s.subnet_id, s.availability_zone, s.cidr_block, s.visibility]
            for s in classification.subnets
        ]
        print(tabulate(rows, headers=['Subnet', 'Availability Zone', 'CIDR', 'Visibility'], tablefmt='grid'))

        if classification.dropped_ids:
            self.print_status(
                f"Not found in the VPC of {classification.requested_ids[0]}: "
                f"{', '.join(classification.dropped_ids)}",
                'warning'
            )

    def _cell(self, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        if isinstance(value, dict):
            return json.dumps(value, indent=2)
        return value

    def _print_json(self, data: Any) -> None:
        """Print data as JSON."""
        print(json.dumps(data, indent=2, default=str))

    def _print_yaml(self, data: Any) -> None:
        """Print data as YAML."""
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
