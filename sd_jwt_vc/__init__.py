"""SD-JWT VC credential profile plugin."""

import logging

from pres_def.profiles import CredentialProfile, ProfileCodecs

from .codec import SdJwtVcCodec

LOGGER = logging.getLogger(__name__)


def setup(codecs: ProfileCodecs):
    """Register the sd-jwt codec."""
    codecs.register_codec(CredentialProfile.SD_JWT, SdJwtVcCodec())
    LOGGER.debug("Registered sd-jwt profile codec")
