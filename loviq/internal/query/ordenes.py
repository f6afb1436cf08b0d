# loviq.internal.query.ordenes
from typing import Any

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import or_, select

from loviq.internal.query.base import BaseQuery
from loviq.models.db.ordenes import (
    Orden,
    OrdenBase,
    ShopifySyncLog,
    ShopifySyncLogCreate,
    Tienda,
    TipoTienda,
)


class OrdenQuery(BaseQuery[Orden, OrdenBase]):
    def __init__(self) -> None:
        super().__init__(Orden, OrdenBase)

    async def get_by_external_id(self, session: AsyncSession, external_order_id: str) -> Orden | None:
        statement = select(self.model_db).where(self.model_db.external_order_id == external_order_id)
        result = await session.execute(statement)
        return result.scalars().first()

    async def update_status_by_external_id(self, session: AsyncSession, external_order_id: str, status: Any) -> int:
        """
        Una sola sentencia UPDATE sobre las órdenes con ese external_order_id.
        No se lee la orden antes; retorna la cantidad de filas afectadas (puede ser 0).
        """
        statement = (
            update(self.model_db)
            .where(self.model_db.external_order_id == external_order_id)  # type: ignore
            .values(status=status)
        )
        result = await session.execute(statement)
        await session.commit()
        return result.rowcount  # type: ignore


class TiendaQuery(BaseQuery[Tienda, Tienda]):
    def __init__(self) -> None:
        super().__init__(Tienda, Tienda)

    async def get_shopify_by_domain(self, session: AsyncSession, shop_domain: str) -> Tienda | None:
        """La tienda puede estar registrada con el dominio como nombre o como external_store_id."""
        statement = (
            select(self.model_db)
            .where(self.model_db.store_type == TipoTienda.SHOPIFY.value)
            .where(
                or_(
                    self.model_db.name == shop_domain,
                    self.model_db.external_store_id == shop_domain,  # type: ignore
                )
            )
        )
        result = await session.execute(statement)
        return result.scalars().first()


class ShopifySyncLogQuery(BaseQuery[ShopifySyncLog, ShopifySyncLogCreate]):
    def __init__(self) -> None:
        super().__init__(ShopifySyncLog, ShopifySyncLogCreate)
