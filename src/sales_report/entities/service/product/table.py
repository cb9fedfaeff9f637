"""Product database table model."""

from sqlmodel import Field, SQLModel


class ProductTable(SQLModel, table=True):
    """Database persistence model for products.

    Column names follow the seed feed verbatim, including ``dateOfSale``.
    """

    __tablename__ = "products"

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    title: str | None = None
    price: float | None = None
    description: str | None = None
    category: str | None = None
    image: str | None = None
    sold: bool | None = None
    dateOfSale: str | None = None
