"""Path and type field rules for SD-JWT VC credentials."""

from pres_def.codec import BaseProfileCodec
from pres_def.filters import StringConst
from pres_def.profiles import CredentialProfile


class SdJwtVcCodec(BaseProfileCodec):
    """Codec for the sd-jwt profile.

    Claims sit at the root of the SD-JWT payload and the credential type is
    the ``vct`` string.
    """

    profile = CredentialProfile.SD_JWT
    subject_prefix = "$."
    default_type_path = "$.vct"
    type_filter_class = StringConst
