# awscreds/utils/client_factory.py

"""
Factories for credentials and boto3 clients that use the regional STS endpoint.
"""
import logging
from typing import TYPE_CHECKING, Optional

import boto3
import botocore.session
from botocore.config import Config
from botocore.credentials import Credentials

from ..config import Settings, load_settings
from ..exceptions import CredentialsCreationError

if TYPE_CHECKING:
    from ..services.swapper import Swapper

logger = logging.getLogger(__name__)


def new_session(settings: Optional[Settings] = None, region_name: Optional[str] = None) -> boto3.Session:
    """Create a boto3 session whose STS calls go to the regional endpoint."""
    settings = settings or load_settings()
    core_session = botocore.session.get_session()
    core_session.set_config_variable("sts_regional_endpoints", settings.sts_regional_endpoints)
    return boto3.Session(
        botocore_session=core_session,
        region_name=region_name or settings.aws_region,
    )


def new_credentials(region_name: Optional[str] = None) -> Credentials:
    """
    Create credentials from the default provider chain of a fresh session.

    This is the usual ``new_credentials`` factory for Swapper; supply your own
    when the session needs more setup, e.g. an assumed role.
    """
    credentials = new_session(region_name=region_name).get_credentials()
    if credentials is None:
        raise CredentialsCreationError("no credentials found in the default provider chain")
    return credentials


def get_boto3_config() -> Config:
    """Standard client configuration with SigV4 signing."""
    return Config(
        retries={"max_attempts": 3, "mode": "adaptive"},
        max_pool_connections=50,
        signature_version="v4",
    )


def get_client(service_name: str, swapper: Optional["Swapper"] = None, region_name: Optional[str] = None):
    """Create a boto3 client, attached to ``swapper`` when one is given."""
    session = new_session(region_name=region_name)
    client = session.client(service_name, config=get_boto3_config())
    if swapper is not None and not swapper.attach(client):
        raise RuntimeError(f"failed to attach credentials swapper to {service_name} client")
    logger.debug(f"Created {service_name} client in region {client.meta.region_name}")
    return client
