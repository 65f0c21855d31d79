"""Path rules for ISO 18013-5 mobile documents.

mdoc data elements are addressed by namespace and element identifier,
``$['org.iso.18013.5.1']['family_name']``. The document type is carried by
the request itself, so mdoc definitions have no type field.
"""

import logging
from typing import Optional

from pres_def.codec import BaseProfileCodec
from pres_def.paths import MDOC_PATH_PATTERN, DecodedPath
from pres_def.profiles import CredentialProfile

LOGGER = logging.getLogger(__name__)


class MsoMdocCodec(BaseProfileCodec):
    """Codec for the mso_mdoc profile."""

    profile = CredentialProfile.MSO_MDOC

    def encode_path(
        self, logical_name: str, has_prefix: bool, mdoc_prefix: str = ""
    ) -> str:
        """Nest a data element under the namespace when prefixed."""
        if not has_prefix:
            return logical_name
        return f"$['{mdoc_prefix}']['{logical_name}']"

    def decode_path(self, path: str, mdoc_prefix: Optional[str] = None) -> DecodedPath:
        """Recover a data element of the given namespace.

        Paths in any other namespace, or not shaped like a namespaced element,
        are kept verbatim as unprefixed names.
        """
        match = MDOC_PATH_PATTERN.match(path)
        if match and mdoc_prefix is not None and match.group(1) == mdoc_prefix:
            return DecodedPath(match.group(2), True)
        if match:
            LOGGER.debug(
                "Path %s is outside namespace %s; keeping it verbatim", path, mdoc_prefix
            )
        return DecodedPath(path, False)
