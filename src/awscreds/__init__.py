"""awscreds: keep AWS credentials fresh in the background and swap them into boto3 signers."""

import logging

from .config import RefreshConfig, Settings, load_settings
from .exceptions import AwsCredsError, CredentialsCreationError, CredentialsRetrievalError
from .models.credentials import CachedCredentials
from .services.credential_cache import CredentialCache
from .services.refresher import Refresher
from .services.swapper import Swapper
from .utils.client_factory import get_client, new_credentials

# Diagnostics stay silent until the application configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "AwsCredsError",
    "CachedCredentials",
    "CredentialCache",
    "CredentialsCreationError",
    "CredentialsRetrievalError",
    "RefreshConfig",
    "Refresher",
    "Settings",
    "Swapper",
    "get_client",
    "load_settings",
    "new_credentials",
]
