# loviq.models.db.ordenes

"""
Tablas de la aplicación principal que tocan las integraciones.
Las órdenes y tiendas se crean en otro lugar; aquí solo se leen y se actualiza su estado.
"""

from datetime import datetime
from enum import Enum

from pydantic.config import ConfigDict
from sqlmodel import SQLModel, Field, JSON, TIMESTAMP, TEXT


class EstadoOrden(str, Enum):
    PENDING = 'pending'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
    REFUNDED = 'refunded'


class TipoTienda(str, Enum):
    SHOPIFY = 'shopify'
    WOOCOMMERCE = 'woocommerce'


class OrdenBase(SQLModel):
    external_order_id: str | None = Field(default=None, index=True)  # Id de la orden en la plataforma de origen
    # Se guarda tal cual llega del webhook, no se valida contra EstadoOrden.
    status: str | None = None
    updated_at: datetime | None = Field(sa_type=TIMESTAMP(timezone=True), default=None)  # type: ignore


class OrdenUpdate(SQLModel):
    status: str | None = None
    updated_at: datetime | None = None


class Orden(OrdenBase, table=True):
    __tablename__ = 'orders'  # type: ignore
    id: int | None = Field(primary_key=True, default=None)


class Tienda(SQLModel, table=True):
    __tablename__ = 'stores'  # type: ignore
    id: int | None = Field(primary_key=True, default=None)
    name: str = ''
    brand_id: int | None = None
    store_type: str = TipoTienda.SHOPIFY.value
    external_store_id: str | None = None
    # Shopify: {"access_token": ..., "shop_domain": ...}
    api_credentials: dict | None = Field(sa_type=JSON, default=None)  # type: ignore


class ShopifySyncLogCreate(SQLModel):
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)  # type: ignore

    store_id: int
    sync_type: str = 'orders'
    status: str = 'success'
    started_at: datetime = Field(sa_type=TIMESTAMP(timezone=True))  # type: ignore
    finished_at: datetime = Field(sa_type=TIMESTAMP(timezone=True))  # type: ignore
    message: str | None = Field(sa_type=TEXT, default=None)


class ShopifySyncLog(ShopifySyncLogCreate, table=True):
    __tablename__ = 'shopify_sync_logs'  # type: ignore
    id: int | None = Field(primary_key=True, default=None)
