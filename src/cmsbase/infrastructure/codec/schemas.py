"""Pydantic schemas for the JSON bundle format.

A bundle is the whole-store export: ``{"collections": [...], "items": [...]}``
with the camelCase keys of the entities' ``to_dict`` output. The schemas
accept snake_case names as well.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cmsbase.domain.entities.field import FieldType

BundleScalar = Union[str, int, float, bool, None]


class FieldSchema(BaseModel):
    """A field definition inside a bundled collection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(None, description="Original field ID, discarded on restore")
    name: str = Field(..., description="Human-readable label")
    key: str = Field(..., description="Data key")
    type: str = Field("text", description="Field type")
    required: bool = Field(False, description="Advisory required flag")
    default_value: BundleScalar = Field(None, alias="defaultValue")
    is_primary: bool = Field(False, alias="isPrimary")

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        """Validate the type against the supported field types."""
        valid = [t.value for t in FieldType]
        if v.lower() not in valid:
            raise ValueError(f"Invalid field type '{v}'. Must be one of: {', '.join(valid)}")
        return v.lower()

    def definition(self) -> dict:
        """Field attributes without the id, ready for ``create_collection``."""
        return self.model_dump(exclude={"id"})


class CollectionSchema(BaseModel):
    """A bundled collection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., description="Original collection ID")
    name: str = Field(..., description="Collection name")
    slug: str = Field(..., description="Collection slug")
    fields: list[FieldSchema] = Field(default_factory=list)
    item_count: int = Field(0, alias="itemCount")
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")


class ItemSchema(BaseModel):
    """A bundled item."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(None, description="Original item ID")
    collection_id: str = Field(..., alias="collectionId")
    data: dict[str, BundleScalar] = Field(default_factory=dict)
    created_at: Optional[str] = Field(None, alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")


class BundleSchema(BaseModel):
    """Whole-store export."""

    collections: list[CollectionSchema]
    items: list[ItemSchema] = Field(default_factory=list)
