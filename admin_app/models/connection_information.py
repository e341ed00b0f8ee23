"""
Connection details for an ODS API and the modes it can run in.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator
from admin_app.core.exceptions import ConfigurationException


class CloudOdsEnvironment(str, Enum):
    """Environment the admin app manages."""
    PRODUCTION = "Production"


class ApiMode(str, Enum):
    """ODS API deployment mode."""
    SANDBOX = "sandbox"
    SHARED_INSTANCE = "sharedinstance"
    YEAR_SPECIFIC = "yearspecific"
    DISTRICT_SPECIFIC = "districtspecific"

    @classmethod
    def parse(cls, value: str) -> "ApiMode":
        """Parse a configured API mode, ignoring case."""
        normalized = (value or "").strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        raise ConfigurationException(
            f"Unsupported API mode '{value}'. Allowed values: {', '.join(m.value for m in cls)}"
        )

    @property
    def supports_single_instance(self) -> bool:
        return self in (ApiMode.SANDBOX, ApiMode.SHARED_INSTANCE)


class OdsApiConnectionInformation(BaseModel):
    """
    Connection information for one ODS instance.

    Derived URLs include the instance's numeric suffix for modes
    that route to more than one ODS database.
    """
    model_config = ConfigDict(frozen=True)

    instance_name: str
    api_mode: ApiMode
    api_server_url: str
    client_key: str = ""
    client_secret: str = ""
    instance_suffix: Optional[int] = None

    @field_validator('api_server_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def instance_segment(self) -> str:
        if self.api_mode.supports_single_instance or self.instance_suffix is None:
            return ""
        return f"/{self.instance_suffix}"

    @property
    def api_base_url(self) -> str:
        return f"{self.api_server_url}/data/v3{self.instance_segment}"

    @property
    def oauth_url(self) -> str:
        return f"{self.api_server_url}/oauth"

    @property
    def metadata_url(self) -> str:
        return f"{self.api_server_url}/metadata"

    @property
    def dependencies_url(self) -> str:
        return f"{self.metadata_url}/data/v3{self.instance_segment}/dependencies"
