"""Product repository."""

from sqlmodel import Session, func, select

from .entity import Product
from .table import ProductTable


class ProductRepository:
    """Data-access layer for products."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, product_id: int) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def exists(self, product_id: int) -> bool:
        return self._session.get(ProductTable, product_id) is not None

    def create(self, product: Product) -> Product:
        """Insert a product and flush so later lookups in the same transaction see it."""
        row = ProductTable.model_validate(product.model_dump())
        self._session.add(row)
        self._session.flush()
        return Product.model_validate(row, from_attributes=True)

    def count(self) -> int:
        return self._session.exec(select(func.count()).select_from(ProductTable)).one()
