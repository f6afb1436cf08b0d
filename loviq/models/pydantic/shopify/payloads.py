# loviq.models.pydantic.shopify.payloads

# Modelos de payloads enviados por Shopify en webhooks de órdenes (orders/updated, orders/paid,
# orders/fulfilled, orders/cancelled). Solo se declaran los campos que se usan.

from enum import Enum

from loviq.models.pydantic.base import Base


class FinancialStatus(Enum):
    """Valores en minúscula tal como llegan en el webhook REST."""

    PENDING = 'pending'
    AUTHORIZED = 'authorized'
    PARTIALLY_PAID = 'partially_paid'
    PAID = 'paid'
    PARTIALLY_REFUNDED = 'partially_refunded'
    REFUNDED = 'refunded'
    VOIDED = 'voided'


class FulfillmentStatus(Enum):
    PARTIAL = 'partial'
    FULFILLED = 'fulfilled'


class OrdenShopify(Base):
    id: int
    name: str = ''  # Es el número de pedido que se ve en la interfaz de Shopify, ej. #1001
    email: str | None = None
    financial_status: str = ''
    fulfillment_status: str | None = None
    cancelled_at: str | None = None
    cancel_reason: str | None = None
    total_price: str = '0.00'
    currency: str = ''
