"""Generic repository for the dashboard's simple CRUD entities.

Customers, vendors, products, expenses and transactions share the same
read/write surface; each gets a thin subclass naming its model.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.infrastructure.persistence.database import Base
from ledgerly.infrastructure.persistence.models import (
    CustomerModel,
    ExpenseModel,
    ProductModel,
    TransactionModel,
    VendorModel,
)

ModelT = TypeVar("ModelT", bound=Base)


class EntityRepository(Generic[ModelT]):
    """Repository for one entity table.

    Subclasses set `model` and, optionally, `default_order` (a column name;
    a leading '-' sorts descending).
    """

    model: ClassVar[type[Base]]
    default_order: ClassVar[str] = "-id"

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    def _order_by(self):
        name = self.default_order.lstrip("-")
        column = getattr(self.model, name)
        if self.default_order.startswith("-"):
            return (column.desc(), self.model.id.desc())
        return (column.asc(), self.model.id.asc())

    async def list_all(self, limit: int | None = None) -> list[ModelT]:
        """List rows in the repository's default order.

        Args:
            limit: Maximum number of rows to return (all when None).

        Returns:
            List of models.
        """
        query = select(self.model).order_by(*self._order_by())
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, entity_id: int) -> ModelT | None:
        """Get a row by primary key.

        Returns:
            Model if found, None otherwise.
        """
        result = await self.session.execute(
            select(self.model).where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none()

    async def create(self, values: Mapping[str, Any]) -> ModelT:
        """Insert a row built from column values."""
        entity = self.model(**values)
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: ModelT, values: Mapping[str, Any]) -> ModelT:
        """Apply column values to an existing row."""
        for key, value in values.items():
            setattr(entity, key, value)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    async def count_all(self) -> int:
        result = await self.session.execute(select(func.count(self.model.id)))
        return result.scalar_one()

    async def sum_of(self, column_name: str, *criteria) -> Decimal:
        """Sum a numeric column over rows matching optional criteria.

        Returns:
            The sum, or Decimal('0') when no rows match.
        """
        column = getattr(self.model, column_name)
        query = select(func.coalesce(func.sum(column), 0))
        if criteria:
            query = query.where(*criteria)
        result = await self.session.execute(query)
        return Decimal(str(result.scalar_one()))


class CustomerRepository(EntityRepository[CustomerModel]):
    model = CustomerModel
    default_order = "name"


class VendorRepository(EntityRepository[VendorModel]):
    model = VendorModel
    default_order = "name"


class ProductRepository(EntityRepository[ProductModel]):
    model = ProductModel
    default_order = "name"


class ExpenseRepository(EntityRepository[ExpenseModel]):
    model = ExpenseModel
    default_order = "-date"


class TransactionRepository(EntityRepository[TransactionModel]):
    model = TransactionModel
    default_order = "-date"
