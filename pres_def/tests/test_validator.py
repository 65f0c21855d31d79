import pytest

from pres_def.error import StructuralError, StructuralErrorKind
from pres_def.validator import validate


class TestValidate:
    @pytest.mark.parametrize(
        "document",
        [
            {},
            {"constraints": {}},
            {"constraints": {"fields": {}}},
            {"constraints": []},
            {"fields": []},
            [],
            "constraints",
        ],
    )
    @pytest.mark.parametrize("profile", ["jwt", "sd-jwt", "mso_mdoc"])
    def test_missing_constraints(self, document, profile):
        with pytest.raises(StructuralError) as excinfo:
            validate(document, profile)
        assert excinfo.value.kind is StructuralErrorKind.MISSING_CONSTRAINTS

    @pytest.mark.parametrize("profile", ["jwt", "sd-jwt"])
    def test_missing_type_field(self, profile):
        with pytest.raises(StructuralError) as excinfo:
            validate({"constraints": {"fields": [{"path": ["$.name"]}]}}, profile)
        assert excinfo.value.kind is StructuralErrorKind.MISSING_TYPE_FIELD
        assert "$.type" in excinfo.value.reason

    def test_mdoc_exempt_from_type_field(self):
        validate({"constraints": {"fields": [{"path": ["$['ns']['x']"]}]}}, "mso_mdoc")

    @pytest.mark.parametrize("type_path", ["$.type", "$.vct"])
    @pytest.mark.parametrize("profile", ["jwt", "sd-jwt"])
    def test_either_type_literal(self, type_path, profile):
        validate({"constraints": {"fields": [{"path": [type_path]}]}}, profile)

    def test_filter_shape_not_checked(self):
        validate(
            {
                "constraints": {
                    "fields": [
                        {"path": ["$.type"], "filter": "anything"},
                        {"path": ["$.x"], "filter": {"type": "object"}},
                    ]
                }
            },
            "jwt",
        )
