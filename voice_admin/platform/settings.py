"""Application settings and configuration.

This module provides Pydantic settings classes for tool configuration,
loaded from environment variables with support for nested configuration
(for example ``AUTH__TENANT_ID`` or ``OPEN_DATA__RESOURCE_ID``).
"""

import logging

import pydantic_settings
from pydantic import BaseModel, Field, field_validator


class AuthSettings(BaseModel):
    """OAuth2 client-credentials configuration for the tenant.

    Attributes:
        tenant_id: Directory tenant ID (GUID or verified domain)
        client_id: Application (client) ID of the admin app registration
        client_secret: Client secret of the admin app registration
        authority: Identity provider base URL
    """

    tenant_id: str
    client_id: str
    client_secret: str
    authority: str = Field("https://login.microsoftonline.com")


class DirectorySettings(BaseModel):
    url: str = Field("https://graph.microsoft.com/v1.0")
    scope: str = Field("https://graph.microsoft.com/.default")


class CallingPlatformSettings(BaseModel):
    url: str = Field("https://api.interfaces.records.teams.microsoft.com")
    scope: str = Field("48ac35b8-9aa8-4d74-927d-1f4a14a0b239/.default")


class OpenDataSettings(BaseModel):
    """Public-holiday open-data feed.

    Attributes:
        url: Base URL of the CKAN instance
        resource_id: Dataset resource queried through datastore_search_sql
        skip_names: Holiday names dropped from every fetch
    """

    url: str = Field("https://data.gov.au/data")
    resource_id: str = Field("33673aca-0857-42e5-b8f0-9981b4755686")
    skip_names: list[str] = Field(default_factory=lambda: ["Bank Holiday"])


class LoggingSettings(BaseModel):
    level: str = Field("INFO")
    json_output: bool = Field(False)

    @field_validator("level")
    @classmethod
    def _validate_log_level(cls, v):
        v_upper = v.upper()
        if v_upper not in logging._nameToLevel:
            raise ValueError(f'invalid value "{v}"')
        return v_upper


class ProvisioningSettings(BaseModel):
    """Defaults for resource-account provisioning.

    Attributes:
        usage_location: Two-letter country code set before licensing
        license_sku: SKU part number assigned to new resource accounts
        replication_delay_seconds: Wait between account creation and licensing
    """

    usage_location: str = Field("AU")
    license_sku: str = Field("PHONESYSTEM_VIRTUALUSER")
    replication_delay_seconds: float = Field(60.0, ge=0)

    @field_validator("usage_location")
    @classmethod
    def _validate_usage_location(cls, v):
        v_upper = v.strip().upper()
        if len(v_upper) != 2 or not v_upper.isalpha():
            raise ValueError(f'invalid usage location "{v}"')
        return v_upper


class BugsnagSettings(BaseModel):
    api_key: str
    release_stage: str = Field("development")

    @field_validator("release_stage")
    @classmethod
    def _validate_bugsnag_release_stage(cls, v):
        if v not in ["development", "production", "local"]:
            raise ValueError(f'invalid bugsnag release stage "{v}"')
        return v


class Settings(pydantic_settings.BaseSettings):
    model_config = pydantic_settings.SettingsConfigDict(env_nested_delimiter="__")

    auth: AuthSettings

    directory: DirectorySettings = DirectorySettings()
    calling: CallingPlatformSettings = CallingPlatformSettings()
    open_data: OpenDataSettings = OpenDataSettings()
    logging: LoggingSettings = LoggingSettings()
    provisioning: ProvisioningSettings = ProvisioningSettings()

    # Error reporting is disabled unless an API key is configured
    bugsnag: BugsnagSettings | None = None

    @property
    def token_url(self) -> str:
        """Construct the OAuth2 token endpoint for the configured tenant."""
        return f"{self.auth.authority.rstrip('/')}/{self.auth.tenant_id}/oauth2/v2.0/token"
