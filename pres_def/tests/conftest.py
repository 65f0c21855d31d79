"""Fixtures for presentation definition builder tests."""

import pytest

from pres_def.filters import NumberRange, StringPattern
from pres_def.models.field_model import FieldEntry, FieldModel, TopLevelState
from pres_def.profiles import CredentialProfile
from pres_def.synchronizer import Synchronizer

MDL_NAMESPACE = "org.iso.18013.5.1"


@pytest.fixture
def synchronizer():
    return Synchronizer()


@pytest.fixture
def jwt_model():
    return FieldModel(
        entries=(
            FieldEntry("given_name"),
            FieldEntry("address.street, address.locality"),
            FieldEntry("gpa", filter=NumberRange(minimum=2, maximum=4)),
            FieldEntry("$.issuer", has_prefix=False),
        ),
        state=TopLevelState(
            credential_profile=CredentialProfile.JWT,
            type_check_paths="$.type",
            type_filter_value="UniversityDegreeCredential",
        ),
    )


@pytest.fixture
def sd_jwt_model():
    return FieldModel(
        entries=(
            FieldEntry("given_name"),
            FieldEntry("family_name", filter=StringPattern("^[A-Z]")),
            FieldEntry("something_nested.key1"),
        ),
        state=TopLevelState(
            credential_profile=CredentialProfile.SD_JWT,
            limit_disclosure_requested=True,
            type_check_paths="$.vct",
            type_filter_value="ExampleIDCard",
        ),
    )


@pytest.fixture
def mdoc_model():
    return FieldModel(
        entries=(
            FieldEntry("family_name"),
            FieldEntry("birth_date"),
            FieldEntry("age_over_18", filter=None),
        ),
        state=TopLevelState(
            credential_profile=CredentialProfile.MSO_MDOC,
            limit_disclosure_requested=True,
            mdoc_namespace_prefix=MDL_NAMESPACE,
        ),
    )
