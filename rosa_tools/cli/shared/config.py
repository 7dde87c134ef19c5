"""
Configuration loading for rosa-tools.

Values come from command-line flags first, then the environment, then the
OCM CLI configuration file. The result is frozen for the rest of the run.
"""

import argparse
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from core.ocm_client import DEFAULT_CLIENT_ID, DEFAULT_TOKEN_URL, DEFAULT_URL
from models.errors import ValidationError


DEFAULT_OCM_CONFIG = Path.home() / ".config" / "ocm" / "ocm.json"


@dataclass(frozen=True)
class ToolConfig:
    """Settings for one rosa-tools invocation."""
    ocm_url: str = DEFAULT_URL
    access_token: str = ""
    refresh_token: str = ""
    token_url: str = DEFAULT_TOKEN_URL
    client_id: str = DEFAULT_CLIENT_ID
    aws_profile: Optional[str] = None
    aws_region: Optional[str] = None
    verbose: bool = False

    @property
    def has_credentials(self) -> bool:
        return bool(self.access_token or self.refresh_token)


def read_ocm_config(path: Path) -> Dict[str, Any]:
    """
    Read the OCM CLI configuration file.

    Returns:
        The decoded file, or an empty dict when it does not exist

    Raises:
        ValidationError: If the file is not valid JSON
    """
    if not path.exists():
        return {}
    try:
        with open(path, 'r') as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise ValidationError(f"Failed to read OCM configuration '{path}': {e}", path=str(path))


def load_config(args: argparse.Namespace, environ: Mapping[str, str] = None) -> ToolConfig:
    """Build the configuration from parsed arguments, environment and OCM config file."""
    env = os.environ if environ is None else environ
    file_path = Path(env['OCM_CONFIG']) if env.get('OCM_CONFIG') else DEFAULT_OCM_CONFIG
    ocm_file = read_ocm_config(file_path)

    return ToolConfig(
        ocm_url=(getattr(args, 'ocm_url', None) or env.get('OCM_URL')
                 or ocm_file.get('url') or DEFAULT_URL),
        access_token=env.get('OCM_TOKEN') or ocm_file.get('access_token', ''),
        refresh_token=ocm_file.get('refresh_token', ''),
        token_url=ocm_file.get('token_url') or DEFAULT_TOKEN_URL,
        client_id=ocm_file.get('client_id') or DEFAULT_CLIENT_ID,
        aws_profile=getattr(args, 'profile', None) or env.get('AWS_PROFILE'),
        aws_region=getattr(args, 'region', None) or env.get('AWS_REGION'),
        verbose=getattr(args, 'verbose', False)
    )
