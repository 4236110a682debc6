"""Unit tests for the Field entity."""

import pytest

from cmsbase.domain.entities import Field, FieldType


class TestField:
    """Tests for Field construction and conversion."""

    def test_string_type_becomes_enum(self) -> None:
        field = Field(id="f1", name="Rating", key="rating", type="NUMBER")

        assert field.type is FieldType.NUMBER

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown field type 'colour'"):
            Field(id="f1", name="Colour", key="colour", type="colour")

    def test_empty_id_raises(self) -> None:
        with pytest.raises(ValueError, match="Field ID is required"):
            Field(id="", name="Title", key="title")

    def test_from_definition_discards_original_id(self) -> None:
        field = Field.from_definition(
            {"id": "f_old", "name": "Title", "key": "title", "defaultValue": "Untitled", "isPrimary": True},
            "f_new",
        )

        assert field.id == "f_new"
        assert field.default_value == "Untitled"
        assert field.is_primary is True
        assert field.type is FieldType.TEXT

    def test_from_definition_ignores_unknown_keys(self) -> None:
        field = Field.from_definition({"name": "Title", "key": "title", "width": 200}, "f1")

        assert field == Field(id="f1", name="Title", key="title")

    def test_from_field_instance(self) -> None:
        original = Field(id="f1", name="Title", key="title", required=True)

        copy = Field.from_definition(original, "f2")

        assert copy.id == "f2"
        assert copy.required is True
        assert original.id == "f1"

    def test_merged_preserves_id(self) -> None:
        field = Field(id="f1", name="Title", key="title")

        merged = field.merged({"id": "f_other", "name": "Headline", "required": True})

        assert merged.id == "f1"
        assert merged.name == "Headline"
        assert merged.key == "title"
        assert merged.required is True

    def test_to_dict_uses_camel_case(self) -> None:
        field = Field(id="f1", name="Active", key="active", type=FieldType.BOOLEAN, default_value=True, is_primary=True)

        assert field.to_dict() == {
            "id": "f1",
            "name": "Active",
            "key": "active",
            "type": "boolean",
            "required": False,
            "defaultValue": True,
            "isPrimary": True,
        }

    def test_to_dict_omits_unset_optionals(self) -> None:
        data = Field(id="f1", name="Title", key="title").to_dict()

        assert "defaultValue" not in data
        assert "isPrimary" not in data

    def test_definition_has_no_id(self) -> None:
        definition = Field(id="f1", name="Qty", key="qty", type=FieldType.NUMBER).definition()

        assert "id" not in definition
        assert definition["type"] == "number"
