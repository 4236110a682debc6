"""Unit tests for the Collection, Item and CMSStats entities."""

import re

import pytest

from cmsbase.domain.entities import CMSStats, Collection, Field, Item, utc_now


class TestCollection:
    """Tests for the Collection entity."""

    def test_requires_id(self) -> None:
        with pytest.raises(ValueError, match="Collection ID is required"):
            Collection(id="", name="Posts", slug="posts")

    def test_primary_field_prefers_flag(self) -> None:
        collection = Collection(
            id="col_a",
            name="Posts",
            slug="posts",
            fields=[
                Field(id="f1", name="Body", key="body"),
                Field(id="f2", name="Title", key="title", is_primary=True),
            ],
        )

        assert collection.primary_field.key == "title"

    def test_primary_field_falls_back_to_first(self) -> None:
        collection = Collection(
            id="col_a",
            name="Posts",
            slug="posts",
            fields=[Field(id="f1", name="Body", key="body"), Field(id="f2", name="Title", key="title")],
        )

        assert collection.primary_field.key == "body"

    def test_primary_field_none_without_fields(self) -> None:
        assert Collection(id="col_a", name="Posts", slug="posts").primary_field is None

    def test_get_field_and_keys(self) -> None:
        collection = Collection(
            id="col_a",
            name="Posts",
            slug="posts",
            fields=[Field(id="f1", name="Title", key="title"), Field(id="f2", name="Qty", key="qty")],
        )

        assert collection.get_field("f2").key == "qty"
        assert collection.get_field("f9") is None
        assert collection.field_keys == ["title", "qty"]

    def test_to_dict(self) -> None:
        collection = Collection(
            id="col_a",
            name="Posts",
            slug="posts",
            item_count=2,
            created_at="2025-01-01T00:00:00.000Z",
            updated_at="2025-01-02T00:00:00.000Z",
        )

        assert collection.to_dict() == {
            "id": "col_a",
            "name": "Posts",
            "slug": "posts",
            "fields": [],
            "itemCount": 2,
            "createdAt": "2025-01-01T00:00:00.000Z",
            "updatedAt": "2025-01-02T00:00:00.000Z",
        }


class TestItem:
    """Tests for the Item entity."""

    def test_requires_id(self) -> None:
        with pytest.raises(ValueError, match="Item ID is required"):
            Item(id="", collection_id="col_a")

    def test_requires_dict_data(self) -> None:
        with pytest.raises(ValueError, match="must be a dictionary"):
            Item(id="item_a", collection_id="col_a", data=[("title", "A")])

    def test_to_dict(self) -> None:
        item = Item(
            id="item_a",
            collection_id="col_a",
            data={"title": "A"},
            created_at="2025-01-01T00:00:00.000Z",
            updated_at="2025-01-01T00:00:00.000Z",
        )

        assert item.to_dict() == {
            "id": "item_a",
            "collectionId": "col_a",
            "data": {"title": "A"},
            "createdAt": "2025-01-01T00:00:00.000Z",
            "updatedAt": "2025-01-01T00:00:00.000Z",
        }


def test_utc_now_format() -> None:
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_now())


def test_cms_stats_to_dict() -> None:
    stats = CMSStats(total_items=12, item_limit=4000, total_collections=4)

    assert stats.to_dict() == {"totalItems": 12, "itemLimit": 4000, "totalCollections": 4}
