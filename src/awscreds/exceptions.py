"""Exceptions raised while creating or validating AWS credentials."""


class AwsCredsError(Exception):
    """Base class for awscreds errors."""


class CredentialsCreationError(AwsCredsError):
    """The credentials factory failed or produced no credentials."""


class CredentialsRetrievalError(AwsCredsError):
    """Credentials exist but their value could not be retrieved or is unusable."""
