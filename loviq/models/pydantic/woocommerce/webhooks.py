# loviq.models.pydantic.woocommerce.webhooks
from pydantic import BaseModel, Field


class RegistroWebhooks(BaseModel):
    site_url: str = Field(min_length=1)
    consumer_key: str = Field(min_length=1)
    consumer_secret: str = Field(min_length=1)
    delivery_url: str = Field(min_length=1)
    topics: list[str] = ['product.updated', 'order.created']


class RegistroWebhooksResponse(BaseModel):
    success: bool = True
    results: list[dict] = []
