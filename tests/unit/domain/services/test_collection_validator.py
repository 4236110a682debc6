from cmsbase.domain.entities import Field
from cmsbase.domain.services.collection_validator import (
    CollectionValidationError,
    CollectionValidator,
)


class TestCollectionValidator:

    # --- Name Validation ---

    def test_validate_name_valid(self):
        for name in ["Players", "Player Reviews", "Cards & Packs", "x"]:
            assert CollectionValidator.validate_name(name) == [], f"Expected no errors for '{name}'"

    def test_validate_name_empty(self):
        for name in ["", "   "]:
            errors = CollectionValidator.validate_name(name)
            assert len(errors) == 1
            assert errors[0].code == "name_required"

    def test_validate_name_too_long(self):
        errors = CollectionValidator.validate_name("a" * 129)
        assert len(errors) == 1
        assert errors[0].code == "name_too_long"

    # --- Slug Validation ---

    def test_validate_slug_format(self):
        errors = CollectionValidator.validate_slug("Bad Slug")
        assert [e.code for e in errors] == ["slug_invalid_chars"]
        assert isinstance(errors[0], CollectionValidationError)

    def test_validate_slug_collision(self):
        errors = CollectionValidator.validate_slug("players", ["players", "cards"])
        assert [e.code for e in errors] == ["slug_not_unique"]

    # --- Field Type Validation ---

    def test_validate_field_type_valid(self):
        for field_type in ["text", "number", "boolean", "date", "image", "richtext", "url", "email", "reference", "TEXT"]:
            assert CollectionValidator.validate_field_type(field_type, 0) == []

    def test_validate_field_type_invalid(self):
        errors = CollectionValidator.validate_field_type("colour", 2)
        assert len(errors) == 1
        assert errors[0].code == "field_type_invalid"
        assert errors[0].field == "fields[2].type"

    # --- Field List Validation ---

    def test_validate_fields_valid(self):
        fields = [
            {"name": "Title", "key": "title", "type": "text", "isPrimary": True},
            Field(id="f2", name="Qty", key="qty", type="number"),
        ]
        assert CollectionValidator.validate_fields(fields) == []

    def test_validate_fields_missing_name_and_key(self):
        errors = CollectionValidator.validate_fields([{"type": "text"}])
        codes = [e.code for e in errors]
        assert "field_name_required" in codes
        assert "field_key_required" in codes

    def test_validate_fields_duplicate_key(self):
        errors = CollectionValidator.validate_fields(
            [{"name": "Title", "key": "title"}, {"name": "Heading", "key": "title"}]
        )
        assert len(errors) == 1
        assert errors[0].code == "field_key_duplicate"
        assert errors[0].field == "fields[1].key"

    def test_validate_fields_multiple_primary(self):
        errors = CollectionValidator.validate_fields(
            [
                {"name": "Title", "key": "title", "is_primary": True},
                {"name": "Name", "key": "name", "isPrimary": True},
            ]
        )
        assert [e.code for e in errors] == ["multiple_primary_fields"]

    # --- Complete Validation ---

    def test_validate_collects_all_errors(self):
        errors = CollectionValidator.validate(
            "", "players", [{"name": "Title", "key": "title", "type": "colour"}], ["players"]
        )
        codes = {e.code for e in errors}
        assert codes == {"name_required", "slug_not_unique", "field_type_invalid"}
