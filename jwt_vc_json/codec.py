"""Path and type field rules for jwt_vc_json credentials.

Subject attributes live under ``credentialSubject`` and the credential type
is the ``type`` array, so the type constant is checked with ``contains``.
Selective disclosure is not part of this profile; ``limit_disclosure`` is
left out of its definitions.
"""

from pres_def.codec import BaseProfileCodec
from pres_def.filters import ArrayContainsConst
from pres_def.profiles import CredentialProfile


class JwtVcJsonCodec(BaseProfileCodec):
    """Codec for the jwt profile."""

    profile = CredentialProfile.JWT
    subject_prefix = "$.credentialSubject."
    default_type_path = "$.type"
    type_filter_class = ArrayContainsConst
    limit_disclosure_required = False
