"""MSO_MDOC credential profile plugin."""

import logging

from pres_def.profiles import CredentialProfile, ProfileCodecs

from .codec import MsoMdocCodec

LOGGER = logging.getLogger(__name__)


def setup(codecs: ProfileCodecs):
    """Register the mso_mdoc codec."""
    codecs.register_codec(CredentialProfile.MSO_MDOC, MsoMdocCodec())
    LOGGER.debug("Registered mso_mdoc profile codec")
