# loviq/routers/shopify.py
from fastapi import APIRouter, HTTPException, status

from loviq.config import Config, ConfigDep
from loviq.internal.integrations.shopify import ShopifyClient
from loviq.internal.log import factory_logger
from loviq.internal.query.ordenes import TiendaQuery
from loviq.models.db.ordenes import TipoTienda
from loviq.models.db.session import SessionFactoryDep
from loviq.models.pydantic.shopify.webhooks import (
    EstadoRegistro,
    RegistroWebhooksShopify,
    RegistroWebhooksShopifyResponse,
    ResumenRegistro,
    WebhookShopify,
)

log_shopify_router = factory_logger('shopify_router', file=True)

TOPICS_ORDENES = ['orders/updated', 'orders/paid', 'orders/fulfilled', 'orders/cancelled']
TOPICS_INVENTARIO = ['inventory_levels/update', 'products/update']

router = APIRouter(
    prefix='/shopify',
    tags=['Shopify'],
)


def webhooks_shopify(config: Config) -> list[WebhookShopify]:
    """Topics que se registran en cada tienda y la dirección que los recibe."""
    direccion_ordenes = f'{config.public_api_url.rstrip("/")}/webhooks/shopify/orden'
    webhooks = [WebhookShopify(topic=topic, address=direccion_ordenes) for topic in TOPICS_ORDENES]
    if config.shopify_inventory_webhook_url:
        webhooks += [
            WebhookShopify(topic=topic, address=config.shopify_inventory_webhook_url) for topic in TOPICS_INVENTARIO
        ]
    return webhooks


@router.post(
    '/webhooks',
    response_model=RegistroWebhooksShopifyResponse,
    status_code=status.HTTP_200_OK,
    summary='Registra los webhooks de Loviq en una tienda Shopify',
    description='Omite los webhooks que ya existen con la misma dirección; los fallidos se reportan en results.',
)
async def registrar_webhooks_shopify(
    registro: RegistroWebhooksShopify,
    config: ConfigDep,
    session_factory: SessionFactoryDep,
):
    if not config.db_configurada or not config.public_api_url:
        log_shopify_router.error('Falta DB_HOST, DB_PASSWORD o PUBLIC_API_URL')
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail='Server configuration error')

    try:
        async with session_factory(config) as session:
            tienda = await TiendaQuery().get(session, registro.store_id)
    except Exception as e:
        log_shopify_router.error(f'Error al consultar la tienda {registro.store_id}: {e}')
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={'error': 'Internal server error', 'message': str(e)},
        )

    if not tienda or tienda.store_type != TipoTienda.SHOPIFY.value:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Shopify store not found')

    credenciales = tienda.api_credentials or {}
    access_token = credenciales.get('access_token')
    shop_domain = credenciales.get('shop_domain')
    if not access_token or not shop_domain:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Store credentials not configured')

    webhooks = webhooks_shopify(config)
    if registro.webhook_types:
        webhooks = [webhook for webhook in webhooks if webhook.topic in registro.webhook_types]

    client = ShopifyClient(shop_domain, access_token, version=config.shopify_api_version)
    try:
        resultados = await client.registrar_webhooks(webhooks)
    except Exception as e:
        log_shopify_router.error(f'Error al registrar webhooks en {shop_domain}: {e}')
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={'error': 'Internal server error', 'message': str(e)},
        )

    summary = ResumenRegistro(
        created=sum(1 for r in resultados if r.status == EstadoRegistro.CREATED),
        already_exists=sum(1 for r in resultados if r.status == EstadoRegistro.EXISTS),
        failed=sum(1 for r in resultados if r.status == EstadoRegistro.FAILED),
    )
    log_shopify_router.info(f'Webhooks de {shop_domain}: {summary.model_dump()}')
    return RegistroWebhooksShopifyResponse(
        store_id=registro.store_id,
        shop_domain=shop_domain,
        summary=summary,
        results=resultados,
    )
