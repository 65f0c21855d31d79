"""Credential profiles and the registry of their codecs."""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Protocol, Union

from .error import ProfileCodecError

if TYPE_CHECKING:
    from .paths import DecodedPath

LOGGER = logging.getLogger(__name__)


class CredentialProfile(str, Enum):
    """Credential encoding profiles a definition can target."""

    JWT = "jwt"
    SD_JWT = "sd-jwt"
    MSO_MDOC = "mso_mdoc"

    @classmethod
    def parse(cls, value: Union[str, "CredentialProfile"]) -> "CredentialProfile":
        """Return the profile for a profile name or credential format identifier."""
        if isinstance(value, cls):
            return value
        profile = FORMAT_ALIASES.get(str(value).strip())
        if profile is None:
            raise ProfileCodecError(f"Unknown credential profile {value}")
        return profile


FORMAT_ALIASES: Dict[str, CredentialProfile] = {
    "jwt": CredentialProfile.JWT,
    "jwt_vc_json": CredentialProfile.JWT,
    "jwt_vc": CredentialProfile.JWT,
    "sd-jwt": CredentialProfile.SD_JWT,
    "vc+sd-jwt": CredentialProfile.SD_JWT,
    "dc+sd-jwt": CredentialProfile.SD_JWT,
    "mso_mdoc": CredentialProfile.MSO_MDOC,
}


class ProfileCodec(Protocol):
    """Path and type field encoding rules of one credential profile."""

    profile: CredentialProfile
    limit_disclosure_required: bool

    @property
    def requires_type_field(self) -> bool:
        """Whether definitions for this profile carry a type field."""
        ...

    def encode_path(
        self, logical_name: str, has_prefix: bool, mdoc_prefix: str = ""
    ) -> str:
        """Encode a logical attribute name into a JSON path."""
        ...

    def decode_path(
        self, path: str, mdoc_prefix: Optional[str] = None
    ) -> "DecodedPath":
        """Decode a JSON path into a logical attribute name."""
        ...

    def encode_type_field(
        self, type_check_paths: str, type_filter_value: Optional[str]
    ) -> Optional[dict]:
        """Build the type field of a definition, if the profile has one."""
        ...


class ProfileCodecs:
    """Registry for credential profile codecs."""

    def __init__(
        self, codecs: Optional[Mapping[CredentialProfile, ProfileCodec]] = None
    ):
        """Initialize the codec registry."""
        self.codecs = dict(codecs) if codecs else {}

    def codec_for_profile(
        self, profile: Union[str, CredentialProfile]
    ) -> ProfileCodec:
        """Return the codec to handle the given profile."""
        codec = self.codecs.get(CredentialProfile.parse(profile))
        if not codec:
            raise ProfileCodecError(f"No loaded codec for profile {profile}")
        return codec

    def register_codec(self, profile: CredentialProfile, codec: ProfileCodec):
        """Register a new codec for a profile."""
        self.codecs[CredentialProfile.parse(profile)] = codec

    @property
    def profiles(self) -> List[CredentialProfile]:
        """Profiles with a registered codec."""
        return list(self.codecs)


_DEFAULT_CODECS: Optional[ProfileCodecs] = None


def default_codecs() -> ProfileCodecs:
    """Return the registry with the bundled profile codecs loaded."""
    global _DEFAULT_CODECS

    if _DEFAULT_CODECS is None:
        import jwt_vc_json
        import mso_mdoc
        import sd_jwt_vc

        codecs = ProfileCodecs()
        for plugin in (jwt_vc_json, sd_jwt_vc, mso_mdoc):
            plugin.setup(codecs)
        LOGGER.debug("Loaded profile codecs: %s", [p.value for p in codecs.profiles])
        _DEFAULT_CODECS = codecs

    return _DEFAULT_CODECS
