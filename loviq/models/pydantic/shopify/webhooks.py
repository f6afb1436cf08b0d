# loviq.models.pydantic.shopify.webhooks
from enum import Enum

from pydantic import BaseModel


class EstadoRegistro(str, Enum):
    CREATED = 'created'
    EXISTS = 'exists'
    FAILED = 'failed'


class WebhookShopify(BaseModel):
    topic: str
    address: str


class ResultadoRegistro(BaseModel):
    topic: str
    status: EstadoRegistro
    error: str | None = None


class ResumenRegistro(BaseModel):
    created: int = 0
    already_exists: int = 0
    failed: int = 0


class RegistroWebhooksShopify(BaseModel):
    store_id: int
    # Sin valor (o lista vacía) se registran todos los topics conocidos
    webhook_types: list[str] | None = None


class RegistroWebhooksShopifyResponse(BaseModel):
    success: bool = True
    store_id: int
    shop_domain: str
    summary: ResumenRegistro
    results: list[ResultadoRegistro]
