"""CRUD routes for customers, vendors, products, expenses and transactions.

Each entity is gated on its feature: reads need view access, writes need
edit access. Admin passes every check.
"""

from enum import Enum
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.exceptions import NotFoundError, PersistenceError
from ledgerly.core.logging import get_logger
from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.feature import (
    CUSTOMERS,
    EXPENSES,
    PRODUCTS,
    TRANSACTIONS,
    VENDORS,
    Feature,
)
from ledgerly.infrastructure.api.dependencies import require_feature
from ledgerly.infrastructure.api.schemas import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
    VendorCreate,
    VendorResponse,
    VendorUpdate,
)
from ledgerly.infrastructure.persistence.database import get_db_session
from ledgerly.infrastructure.persistence.repositories import (
    CustomerRepository,
    EntityRepository,
    ExpenseRepository,
    ProductRepository,
    TransactionRepository,
    VendorRepository,
)

logger = get_logger(__name__)


def _column_values(payload: BaseModel, partial: bool = False) -> dict[str, Any]:
    values = payload.model_dump(exclude_unset=partial)
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in values.items()
        if not (partial and value is None)
    }


def build_entity_router(
    *,
    label: str,
    feature: Feature,
    repository: type[EntityRepository],
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    response_schema: type[BaseModel],
) -> APIRouter:
    """Build list/get/create/update/delete routes for one entity.

    Args:
        label: Singular display name used in messages (e.g., 'Customer').
        feature: Feature whose access level gates the routes.
        repository: Repository class for the entity's table.
        create_schema: Request schema for creation.
        update_schema: Request schema for partial updates.
        response_schema: Response schema read from the model.
    """
    router = APIRouter()
    can_view = Depends(require_feature(feature, AccessLevel.VIEW))
    can_edit = Depends(require_feature(feature, AccessLevel.EDIT))
    not_found = f"{label} not found"
    denied = {403: {"description": f"Insufficient access to {feature.name}"}}

    async def load(session: AsyncSession, entity_id: int):
        try:
            entity = await repository(session).get_by_id(entity_id)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to fetch {label.lower()}") from e
        if entity is None:
            raise NotFoundError(not_found)
        return entity

    @router.get("", response_model=list[response_schema], dependencies=[can_view], responses=denied)
    async def list_entities(session: AsyncSession = Depends(get_db_session)):
        try:
            rows = await repository(session).list_all()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to fetch {label.lower()} list") from e
        return [response_schema.model_validate(row) for row in rows]

    @router.get(
        "/{entity_id}",
        response_model=response_schema,
        dependencies=[can_view],
        responses={**denied, 404: {"description": not_found}},
    )
    async def get_entity(entity_id: int, session: AsyncSession = Depends(get_db_session)):
        return response_schema.model_validate(await load(session, entity_id))

    @router.post(
        "",
        status_code=status.HTTP_201_CREATED,
        response_model=response_schema,
        dependencies=[can_edit],
        responses=denied,
    )
    async def create_entity(
        payload: create_schema,  # type: ignore[valid-type]
        session: AsyncSession = Depends(get_db_session),
    ):
        try:
            entity = await repository(session).create(_column_values(payload))
            await session.commit()
        except SQLAlchemyError as e:
            logger.error("Entity create failed", entity=label, error=str(e))
            raise PersistenceError(f"Failed to create {label.lower()}") from e
        logger.info("Entity created", entity=label, entity_id=entity.id)
        return response_schema.model_validate(entity)

    @router.put(
        "/{entity_id}",
        response_model=response_schema,
        dependencies=[can_edit],
        responses={**denied, 404: {"description": not_found}},
    )
    async def update_entity(
        entity_id: int,
        payload: update_schema,  # type: ignore[valid-type]
        session: AsyncSession = Depends(get_db_session),
    ):
        entity = await load(session, entity_id)
        try:
            entity = await repository(session).update(entity, _column_values(payload, partial=True))
            await session.commit()
        except SQLAlchemyError as e:
            logger.error("Entity update failed", entity=label, entity_id=entity_id, error=str(e))
            raise PersistenceError(f"Failed to update {label.lower()}") from e
        logger.info("Entity updated", entity=label, entity_id=entity_id)
        return response_schema.model_validate(entity)

    @router.delete(
        "/{entity_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        dependencies=[can_edit],
        responses={**denied, 404: {"description": not_found}},
    )
    async def delete_entity(entity_id: int, session: AsyncSession = Depends(get_db_session)):
        entity = await load(session, entity_id)
        try:
            await repository(session).delete(entity)
            await session.commit()
        except SQLAlchemyError as e:
            logger.error("Entity delete failed", entity=label, entity_id=entity_id, error=str(e))
            raise PersistenceError(f"Failed to delete {label.lower()}") from e
        logger.info("Entity deleted", entity=label, entity_id=entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


customers_router = build_entity_router(
    label="Customer",
    feature=CUSTOMERS,
    repository=CustomerRepository,
    create_schema=CustomerCreate,
    update_schema=CustomerUpdate,
    response_schema=CustomerResponse,
)

vendors_router = build_entity_router(
    label="Vendor",
    feature=VENDORS,
    repository=VendorRepository,
    create_schema=VendorCreate,
    update_schema=VendorUpdate,
    response_schema=VendorResponse,
)

products_router = build_entity_router(
    label="Product",
    feature=PRODUCTS,
    repository=ProductRepository,
    create_schema=ProductCreate,
    update_schema=ProductUpdate,
    response_schema=ProductResponse,
)

expenses_router = build_entity_router(
    label="Expense",
    feature=EXPENSES,
    repository=ExpenseRepository,
    create_schema=ExpenseCreate,
    update_schema=ExpenseUpdate,
    response_schema=ExpenseResponse,
)

transactions_router = build_entity_router(
    label="Transaction",
    feature=TRANSACTIONS,
    repository=TransactionRepository,
    create_schema=TransactionCreate,
    update_schema=TransactionUpdate,
    response_schema=TransactionResponse,
)
