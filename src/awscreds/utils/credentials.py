from botocore.credentials import Credentials, ReadOnlyCredentials

from ..exceptions import CredentialsRetrievalError


def retrieve_value(credentials: Credentials) -> ReadOnlyCredentials:
    """
    Fetch the frozen credential value, refreshing it first if it is due.

    Raises CredentialsRetrievalError when the fetch fails or the value has no
    usable key pair.
    """
    try:
        value = credentials.get_frozen_credentials()
    except Exception as e:
        raise CredentialsRetrievalError(f"failed to retrieve credentials value: {e}") from e

    if not value.access_key or not value.secret_key:
        raise CredentialsRetrievalError("failed to retrieve credentials value: empty key pair")
    return value
