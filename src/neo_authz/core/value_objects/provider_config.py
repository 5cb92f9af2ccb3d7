"""Identity provider configuration value object."""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError


class ProviderConfig(BaseModel):
    """Identity provider configuration accepted once by the orchestrator.

    Handles ONLY configuration representation and validation.
    An absent ``identity_pool_id`` disables identity and credential
    resolution entirely; fetch and refresh flows then complete with an
    empty session instead of failing.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    region: str = Field(min_length=1)
    user_pool_id: str = Field(min_length=1, alias="userPoolId")
    identity_pool_id: Optional[str] = Field(default=None, alias="identityPoolId")
    client_id: str = Field(min_length=1, alias="clientId")

    @field_validator("identity_pool_id", mode="before")
    @classmethod
    def _blank_identity_pool_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def has_identity_pool(self) -> bool:
        """Check if identity and credential resolution is enabled."""
        return self.identity_pool_id is not None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProviderConfig":
        """Build configuration from snake_case or camelCase keys.

        Raises:
            ConfigurationError: If required fields are missing or invalid
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Provider configuration must be a mapping, got {type(data).__name__}"
            )

        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as e:
            fields = sorted({str(error["loc"][0]) for error in e.errors() if error["loc"]})
            raise ConfigurationError(
                f"Invalid provider configuration: {', '.join(fields) or 'unknown field'}",
                fields=fields,
            ) from e

    def __str__(self) -> str:
        return (
            f"ProviderConfig(region={self.region}, user_pool_id={self.user_pool_id}, "
            f"identity_pool_id={self.identity_pool_id})"
        )
