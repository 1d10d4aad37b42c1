""" Refresher: keeps a client's own credentials object fresh in the background. """
import logging
from datetime import timedelta
from typing import Optional, Union

from botocore.credentials import Credentials

from ..config import RefreshConfig
from ..exceptions import CredentialsRetrievalError
from ..utils.credentials import retrieve_value
from .periodic import PeriodicTask

default_logger = logging.getLogger(__name__)


class Refresher(PeriodicTask):
    """
    Periodically refreshes AWS credentials in place, so client API requests
    do not pay for the STS call.

    Pass the credentials object the client actually signs with, e.g.
    ``session.get_credentials()`` of the session the client was created from.
    Construction fetches the credentials once, so misconfiguration surfaces
    here and not at the first API request.

    The default period is 55 minutes, for tokens that expire every hour.
    """

    def __init__(
        self,
        credentials: Credentials,
        period: Union[timedelta, float, None] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if credentials is None:
            raise ValueError("credentials cannot be None")

        super().__init__(RefreshConfig.from_settings(period=period, logger=logger or default_logger))
        self.credentials = credentials
        retrieve_value(self.credentials)

    def _tick(self) -> None:
        try:
            retrieve_value(self.credentials)
        except CredentialsRetrievalError as e:
            self.config.logger.error(f"failed to refresh aws credentials: {e}")
