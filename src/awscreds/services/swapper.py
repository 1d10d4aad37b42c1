""" Swapper: rebuilds AWS credentials in the background and swaps them into attached clients' signers. """
import logging
from datetime import timedelta
from typing import Any, Callable, Optional, Protocol, Union, runtime_checkable

from botocore.credentials import Credentials

from ..config import RefreshConfig
from ..exceptions import AwsCredsError, CredentialsCreationError
from ..models.credentials import CachedCredentials
from ..utils.credentials import retrieve_value
from .credential_cache import CredentialCache
from .periodic import PeriodicTask

default_logger = logging.getLogger(__name__)

# Emitted by botocore's RequestSigner right before it builds the auth instance.
SIGN_EVENT = "before-sign"

NewCredentials = Callable[[], Credentials]
SignerOption = Callable[[Any], None]


@runtime_checkable
class SigningEventRegistry(Protocol):
    """The part of a client's event system needed to hook its signing step."""

    def register_first(self, event_name, handler, unique_id=None, unique_id_uses_count=False): ...

    def unregister(self, event_name, handler=None, unique_id=None, unique_id_uses_count=False): ...


class Swapper(PeriodicTask):
    """
    Periodically creates new AWS credentials and swaps them into the request
    signers of attached clients.

    Unlike Refresher, every tick calls ``new_credentials`` again, so the
    credentials source itself can be rebuilt, e.g. a session bound to a
    regional STS endpoint. Construction performs the first refresh
    synchronously and raises if it fails.

    The default period is 55 minutes, for tokens that expire every hour.
    """

    def __init__(
        self,
        new_credentials: NewCredentials,
        period: Union[timedelta, float, None] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if new_credentials is None:
            raise ValueError("new_credentials cannot be None")

        super().__init__(RefreshConfig.from_settings(period=period, logger=logger or default_logger))
        self.new_credentials = new_credentials
        self.cache = CredentialCache()
        self.refresh()

    def refresh(self) -> CachedCredentials:
        """
        Create, validate and publish new credentials.

        The cache is left untouched when any step fails, so the previously
        published credentials stay in use.
        """
        try:
            credentials = self.new_credentials()
        except Exception as e:
            raise CredentialsCreationError(f"failed to create new credentials: {e}") from e
        if not isinstance(credentials, Credentials):
            raise CredentialsCreationError(
                f"failed to create new credentials: factory returned {type(credentials).__name__}")

        retrieve_value(credentials)
        return self.cache.publish(credentials)

    def current(self) -> Optional[CachedCredentials]:
        return self.cache.load()

    def _tick(self) -> None:
        try:
            snapshot = self.refresh()
        except AwsCredsError as e:
            self.config.logger.error(f"failed to refresh aws credentials: {e}")
            return
        self.config.logger.debug(
            f"refreshed aws credentials: version {snapshot.version} from {snapshot.method}")

    def attach(self, client: Any, *signer_options: SignerOption) -> bool:
        """
        Hook the signing step of a boto3/botocore client.

        ``signer_options`` are called with the request signer each time a
        request is about to be signed, e.g. to tweak its flags. After them the
        signer's credentials are replaced with the cached ones. An option that
        raises is logged and skipped; it never fails the request or prevents
        the swap.

        Returns False when the client has no signing event registry. Attaching
        the same client again replaces the previous hook.
        """
        events = getattr(getattr(client, "meta", None), "events", None)
        if not isinstance(events, SigningEventRegistry):
            self.config.logger.warning(f"cannot attach to {type(client).__name__}: no signing events")
            return False

        def swap_credentials(request_signer=None, **kwargs):
            for option in signer_options:
                try:
                    option(request_signer)
                except Exception as e:
                    self.config.logger.warning(f"failed to apply signer option {option!r}: {e}")

            cached = self.cache.load()
            if cached is None or not hasattr(request_signer, "_credentials"):
                self.config.logger.warning("failed to swap aws credentials")
                return
            request_signer._credentials = cached.credentials

        unique_id = f"awscreds-swap-{id(self)}"
        events.unregister(SIGN_EVENT, unique_id=unique_id)
        events.register_first(SIGN_EVENT, swap_credentials, unique_id=unique_id)
        return True
