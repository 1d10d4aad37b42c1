from datetime import datetime, timezone
from typing import Optional

from botocore.credentials import Credentials
from pydantic import BaseModel, ConfigDict, Field


class CachedCredentials(BaseModel):
    credentials: Credentials = Field(
        ..., description="Validated credentials handed to request signers"
    )
    version: int = Field(
        ..., ge=1, description="Publish counter, 1 for the first published value"
    )
    published_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the value was published into the cache",
    )

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @property
    def method(self) -> Optional[str]:
        """Name of the provider that produced the credentials, e.g. 'assume-role'."""
        return getattr(self.credentials, "method", None)
