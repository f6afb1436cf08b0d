import httpx
from asyncio import sleep

from loviq.internal.integrations.base import BaseClient, ClientException
from loviq.internal.log import factory_logger
from loviq.models.pydantic.shopify.webhooks import EstadoRegistro, ResultadoRegistro, WebhookShopify

log_shopify = factory_logger('shopify', file=True)


class ShopifyClient(BaseClient):
    """Cliente REST Admin de Shopify para una tienda, autenticado con su access token."""

    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        version: str = '2024-01',
        timeout: int = 30,
        pause: float = 0.2,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(min_interval=0, transport=transport)
        self.shop_domain = shop_domain
        self.host = f'https://{shop_domain}/admin/api/{version}'
        self.timeout = timeout
        # Pausa entre webhooks para no agotar el límite de la API REST
        self.pause = pause
        self.headers = {
            'Content-Type': 'application/json',
            'X-Shopify-Access-Token': access_token,
        }

    async def listar_webhooks(self, topic: str) -> list[dict]:
        response = await self.request(
            'GET',
            self.headers,
            f'{self.host}/webhooks.json',
            query_params={'topic': topic},
            timeout=self.timeout,
        )
        return response.get('webhooks', [])

    async def crear_webhook(self, topic: str, address: str) -> dict:
        payload = {'webhook': {'topic': topic, 'address': address, 'format': 'json'}}
        response = await self.request(
            'POST',
            self.headers,
            f'{self.host}/webhooks.json',
            payload=payload,
            timeout=self.timeout,
        )
        return response.get('webhook', {})

    async def registrar_webhook(self, webhook: WebhookShopify) -> ResultadoRegistro:
        """Crea el webhook salvo que ya exista uno del mismo topic hacia la misma dirección."""
        try:
            existentes = await self.listar_webhooks(webhook.topic)
        except ClientException as e:
            # Si no se pueden listar se intenta crear igual
            log_shopify.warning(f'No se pudieron listar webhooks {webhook.topic} de {self.shop_domain}: {e.msg}')
            existentes = []

        if any(existente.get('address') == webhook.address for existente in existentes):
            return ResultadoRegistro(topic=webhook.topic, status=EstadoRegistro.EXISTS)

        try:
            creado = await self.crear_webhook(webhook.topic, webhook.address)
        except ClientException as e:
            error = e.response['content'] if e.response else e.msg
            log_shopify.error(f'Error al crear webhook {webhook.topic} en {self.shop_domain}: {error}')
            return ResultadoRegistro(topic=webhook.topic, status=EstadoRegistro.FAILED, error=error)

        log_shopify.info(f'Webhook {webhook.topic} creado en {self.shop_domain}: {creado.get("id")}')
        return ResultadoRegistro(topic=webhook.topic, status=EstadoRegistro.CREATED)

    async def registrar_webhooks(self, webhooks: list[WebhookShopify]) -> list[ResultadoRegistro]:
        resultados = []
        for webhook in webhooks:
            try:
                resultados.append(await self.registrar_webhook(webhook))
            except Exception as e:
                log_shopify.error(f'Error al registrar webhook {webhook.topic} en {self.shop_domain}: {e}')
                resultados.append(ResultadoRegistro(topic=webhook.topic, status=EstadoRegistro.FAILED, error=str(e)))
            if self.pause > 0:
                await sleep(self.pause)
        return resultados
