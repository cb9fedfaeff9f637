"""Entity: Product."""

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    """A product record as delivered by the seed feed.

    Unknown keys in the feed are ignored. ``id`` arrives as a number or a
    numeric string and is always coerced to ``int``.
    """

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="Unique product identifier")
    title: str | None = Field(default=None, description="Title")
    price: float | None = Field(default=None, description="Price")
    description: str | None = Field(default=None, description="Description")
    category: str | None = Field(default=None, description="Category")
    image: str | None = Field(default=None, description="Image URL")
    sold: bool | None = Field(default=None, description="Whether the item was sold")
    dateOfSale: str | None = Field(default=None, description="ISO-8601 sale timestamp")
