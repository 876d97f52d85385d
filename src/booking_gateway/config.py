"""
Configuration management for the booking gateway
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env(name: str, *legacy: str) -> AliasChoices:
    """Accept the field name plus the historical environment variable names."""
    return AliasChoices(name, *legacy)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Service coordinates keep the environment variable names the downstream
    deployments already export (``USERS_ENTRYe``, ``LDAP_ENTRYLu``, ...).
    Matching is case insensitive. Every coordinate is required so a missing
    one fails at startup rather than on the first request.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = ["*"]

    # Environment
    debug: bool = False
    log_level: str = "INFO"

    # Outbound requests
    show_urls: bool = False
    request_timeout: float | None = 30.0

    # Users service
    users_url: str
    users_port: int
    users_entry: str
    users_entry_email: str = Field(validation_alias=_env("users_entry_email", "users_entrye"))

    # Roles service
    role_url: str
    role_port: int
    role_entry: str

    # Favorites service
    favorite_url: str
    favorite_port: int
    favorite_entry: str
    favorite_entry_user: str = Field(
        validation_alias=_env("favorite_entry_user", "favorite_entryu")
    )

    # Locations service
    location_url: str
    location_port: int
    location_entry: str

    # Lodging images service
    lodging_image_url: str
    lodging_image_port: int
    lodging_image_entry: str
    lodging_image_entry_lodging: str = Field(
        validation_alias=_env("lodging_image_entry_lodging", "lodging_image_entryl")
    )

    # Lodgings service
    lodging_url: str
    lodging_port: int
    lodging_entry: str
    lodging_entry_name: str = Field(validation_alias=_env("lodging_entry_name", "lodging_entryn"))
    lodging_entry_user: str = Field(validation_alias=_env("lodging_entry_user", "lodging_entryu"))

    # Reservations service
    reservation_url: str
    reservation_port: int
    reservation_entry: str
    reservation_entry_user: str = Field(
        validation_alias=_env("reservation_entry_user", "reservation_entryu")
    )

    # Billing service
    billing_url: str
    billing_port: int
    billing_entry: str

    # Authentication (LDAP) service
    ldap_url: str
    ldap_port: int
    ldap_entry_login: str = Field(validation_alias=_env("ldap_entry_login", "ldap_entrylu"))
    ldap_entry_add: str = Field(validation_alias=_env("ldap_entry_add", "ldap_entryadu"))
    ldap_entry_update: str = Field(validation_alias=_env("ldap_entry_update", "ldap_entryup"))
    ldap_entry_validate: str = Field(validation_alias=_env("ldap_entry_validate", "ldap_entryv"))


@dataclass(frozen=True)
class ServiceEndpoint:
    """Coordinates of one downstream REST service."""

    host: str
    port: int
    paths: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", MappingProxyType(dict(self.paths)))

    @property
    def origin(self) -> str:
        return f"http://{self.host}:{self.port}"

    def url(self, name: str = "base") -> str:
        """Render the URL of a named path segment.

        Raises:
            KeyError: If the endpoint has no path with that name
        """
        path = self.paths[name].strip("/")
        return f"{self.origin}/{path}"


def build_endpoints(settings: Settings) -> Mapping[str, ServiceEndpoint]:
    """Build the immutable domain name -> endpoint mapping from settings."""
    s = settings
    endpoints = {
        "users": ServiceEndpoint(
            s.users_url,
            s.users_port,
            {"base": s.users_entry, "email": s.users_entry_email},
        ),
        "roles": ServiceEndpoint(s.role_url, s.role_port, {"base": s.role_entry}),
        "favorites": ServiceEndpoint(
            s.favorite_url,
            s.favorite_port,
            {"base": s.favorite_entry, "user": s.favorite_entry_user},
        ),
        "locations": ServiceEndpoint(s.location_url, s.location_port, {"base": s.location_entry}),
        "lodging_images": ServiceEndpoint(
            s.lodging_image_url,
            s.lodging_image_port,
            {"base": s.lodging_image_entry, "lodging": s.lodging_image_entry_lodging},
        ),
        "lodgings": ServiceEndpoint(
            s.lodging_url,
            s.lodging_port,
            {
                "base": s.lodging_entry,
                "name": s.lodging_entry_name,
                "user": s.lodging_entry_user,
            },
        ),
        "reservations": ServiceEndpoint(
            s.reservation_url,
            s.reservation_port,
            {"base": s.reservation_entry, "user": s.reservation_entry_user},
        ),
        "billing": ServiceEndpoint(s.billing_url, s.billing_port, {"base": s.billing_entry}),
        "auth": ServiceEndpoint(
            s.ldap_url,
            s.ldap_port,
            {
                "login": s.ldap_entry_login,
                "add": s.ldap_entry_add,
                "update": s.ldap_entry_update,
                "validate": s.ldap_entry_validate,
            },
        ),
    }
    return MappingProxyType(endpoints)
