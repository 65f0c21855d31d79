"""Structural checks for hand edited definition documents."""

import logging
from typing import Any, Optional, Union

from .error import StructuralError, StructuralErrorKind
from .paths import is_type_field
from .profiles import CredentialProfile, ProfileCodecs, default_codecs

LOGGER = logging.getLogger(__name__)


def validate(
    document: Any,
    profile: Union[str, CredentialProfile],
    codecs: Optional[ProfileCodecs] = None,
):
    """Raise StructuralError if a document cannot be reconciled.

    Only the constraint container and, for profiles that carry one, the type
    field are required. Filter shapes are never rejected.
    """
    constraints = document.get("constraints") if isinstance(document, dict) else None
    if not isinstance(constraints, dict) or not isinstance(
        constraints.get("fields"), list
    ):
        raise StructuralError(StructuralErrorKind.MISSING_CONSTRAINTS)

    codec = (codecs or default_codecs()).codec_for_profile(profile)
    if codec.requires_type_field and not any(
        is_type_field(field) for field in constraints["fields"]
    ):
        raise StructuralError(StructuralErrorKind.MISSING_TYPE_FIELD)

    LOGGER.debug(
        "Definition with %d fields is valid for %s",
        len(constraints["fields"]),
        codec.profile.value,
    )
