"""Retrieve configuration values."""

from dataclasses import dataclass
from os import getenv
from typing import Any, Mapping, Optional

from .error import ProfileCodecError
from .profiles import CredentialProfile


class ConfigError(ValueError):
    """Base class for configuration errors."""

    def __init__(self, var: str, env: str):
        """Initialize a ConfigError."""
        super().__init__(
            f"Invalid {var} specified for presentation definition builder; use "
            f"either pres_def.{var} setting or environment variable {env}"
        )


@dataclass
class Config:
    """Configuration for the editor session and command line."""

    profile: CredentialProfile = CredentialProfile.JWT
    indent: int = 2
    mdoc_namespace: str = ""

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]] = None) -> "Config":
        """Retrieve configuration from settings, falling back to environment."""
        settings = settings or {}

        profile_name = settings.get("profile") or getenv("PRES_DEF_PROFILE", "jwt")
        try:
            profile = CredentialProfile.parse(profile_name)
        except ProfileCodecError as err:
            raise ConfigError("profile", "PRES_DEF_PROFILE") from err

        indent = settings.get("indent")
        if indent is None:
            indent = getenv("PRES_DEF_INDENT", "2")
        try:
            indent = int(indent)
        except (TypeError, ValueError) as err:
            raise ConfigError("indent", "PRES_DEF_INDENT") from err
        if indent < 0:
            raise ConfigError("indent", "PRES_DEF_INDENT")

        mdoc_namespace = settings.get("mdoc_namespace") or getenv(
            "PRES_DEF_MDOC_NAMESPACE", ""
        )

        return cls(profile, indent, mdoc_namespace)
