import httpx

from loviq.internal.integrations.base import BaseClient
from loviq.internal.log import factory_logger

log_woocommerce = factory_logger('woocommerce', file=True)


class WooCommerceClient(BaseClient):
    """Cliente REST de WooCommerce (wc/v3) autenticado con consumer key/secret por Basic Auth."""

    def __init__(
        self,
        site_url: str,
        consumer_key: str,
        consumer_secret: str,
        timeout: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(min_interval=0.1, transport=transport)
        self.base_url = f'{site_url.rstrip("/")}/wp-json/wc/v3'
        self.auth = (consumer_key, consumer_secret)
        self.timeout = timeout
        self.headers = {'Content-Type': 'application/json'}

    async def registrar_webhook(self, topic: str, delivery_url: str) -> dict:
        payload = {
            'name': f'loviq-{topic}',
            'topic': topic,
            'delivery_url': delivery_url,
            'status': 'active',
        }
        response = await self.request(
            'POST',
            self.headers,
            f'{self.base_url}/webhooks',
            payload=payload,
            timeout=self.timeout,
            auth=self.auth,
        )
        log_woocommerce.info(f'Webhook {topic} registrado en {self.base_url}: {response.get("id")}')
        return response
