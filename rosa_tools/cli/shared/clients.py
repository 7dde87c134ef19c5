"""
Client construction from the loaded configuration.
"""

from core.aws_client import AWSClient
from core.ocm_client import OCMClient
from models.errors import ForbiddenError

from .config import ToolConfig


def create_ocm_client(config: ToolConfig) -> OCMClient:
    """
    Create the OCM client.

    Raises:
        ForbiddenError: If no token is configured
    """
    if not config.has_credentials:
        raise ForbiddenError(
            "Not logged in to OCM. Set OCM_TOKEN or log in with the ocm CLI "
            "so that ~/.config/ocm/ocm.json holds a token"
        )
    return OCMClient(
        url=config.ocm_url,
        token=config.access_token,
        refresh_token=config.refresh_token,
        token_url=config.token_url,
        client_id=config.client_id,
        verbose=config.verbose
    )


def create_aws_client(config: ToolConfig) -> AWSClient:
    return AWSClient(profile=config.aws_profile, region=config.aws_region, verbose=config.verbose)
