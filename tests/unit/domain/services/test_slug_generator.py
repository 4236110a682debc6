"""Unit tests for SlugGenerator."""

from cmsbase.domain.services.slug_generator import SlugGenerator


class TestSlugGenerator:
    """Tests for slug and key derivation."""

    def test_generate_collapses_whitespace(self) -> None:
        assert SlugGenerator.generate("Player  Reviews") == "player-reviews"

    def test_generate_drops_other_characters(self) -> None:
        assert SlugGenerator.generate("Cards & Packs!") == "cards--packs"

    def test_field_key(self) -> None:
        assert SlugGenerator.field_key("Overall Rating") == "overall_rating"

    def test_import_key_replaces_each_character(self) -> None:
        assert SlugGenerator.import_key("Card Name") == "card_name"
        assert SlugGenerator.import_key("Price ($)") == "price____"

    def test_import_slug_replaces_each_character(self) -> None:
        assert SlugGenerator.import_slug("My Players.v2") == "my-players-v2"

    def test_unique_returns_slug_when_free(self) -> None:
        assert SlugGenerator.unique("posts", ["players"]) == "posts"

    def test_unique_appends_counter(self) -> None:
        assert SlugGenerator.unique("posts", ["posts", "posts-2"]) == "posts-3"


class TestSlugValidation:
    """Tests for slug validation."""

    def test_valid_slug(self) -> None:
        assert SlugGenerator.validate("player-reviews") == []
        assert SlugGenerator.is_valid("cards") is True

    def test_empty_slug(self) -> None:
        errors = SlugGenerator.validate("")

        assert len(errors) == 1
        assert errors[0].code == "slug_required"

    def test_invalid_characters(self) -> None:
        errors = SlugGenerator.validate("Player_Reviews")

        assert len(errors) == 1
        assert errors[0].code == "slug_invalid_chars"
        assert SlugGenerator.is_valid("Player_Reviews") is False
