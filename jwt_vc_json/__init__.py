"""jwt_vc_json credential profile plugin."""

import logging

from pres_def.profiles import CredentialProfile, ProfileCodecs

from .codec import JwtVcJsonCodec

LOGGER = logging.getLogger(__name__)


def setup(codecs: ProfileCodecs):
    """Register the jwt_vc_json codec."""
    codecs.register_codec(CredentialProfile.JWT, JwtVcJsonCodec())
    LOGGER.debug("Registered jwt_vc_json profile codec")
