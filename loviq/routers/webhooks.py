# loviq/routers/webhooks.py
from enum import Enum

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from loviq.config import ConfigDep
from loviq.internal.cors import CORS_HEADERS_PERMISIVOS
from loviq.internal.log import factory_logger
from loviq.internal.webhooks.resultado import respuesta_shopify, respuesta_woocommerce
from loviq.internal.webhooks.shopify import sincronizar_orden_shopify
from loviq.internal.webhooks.woocommerce import sincronizar_estado_woocommerce
from loviq.models.db.session import SessionFactoryDep

# Seguridad
from loviq.routers.auth import hmac_validation_shopify

log_webhook_woocommerce = factory_logger('webhook_woocommerce', file=True)
log_webhook_shopify = factory_logger('webhook_shopify', file=True)

# WooCommerce no restringe el método con el que entrega; el receptor acepta todos.
METODOS_HTTP = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS', 'TRACE', 'CONNECT']


class Tags(Enum):
    WEBHOOKS = 'Webhooks'
    WOOCOMMERCE = 'WooCommerce'
    SHOPIFY = 'Shopify'


router = APIRouter(
    prefix='/webhooks',
    tags=[Tags.WEBHOOKS],
)


def respuesta_preflight() -> Response:
    """200 con cuerpo vacío, sin tocar la base de datos."""
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS_PERMISIVOS)


@router.api_route(
    '/woocommerce/orden',
    methods=METODOS_HTTP,
    status_code=status.HTTP_200_OK,
    summary='Sincroniza el estado de una orden desde un webhook de WooCommerce',
    description='Siempre responde 200 {"success": true} para que WooCommerce no reintente.',
    tags=[Tags.WEBHOOKS, Tags.WOOCOMMERCE],
)
async def recibir_orden_woocommerce(
    request: Request,
    config: ConfigDep,
    session_factory: SessionFactoryDep,
):
    if request.method == 'OPTIONS':
        return respuesta_preflight()

    try:
        body = await request.body()
    except Exception as e:
        log_webhook_woocommerce.error(f'No se pudo leer el cuerpo del webhook: {e}')
        return JSONResponse(content={'success': True}, status_code=status.HTTP_200_OK)

    resultado = await sincronizar_estado_woocommerce(body, config, session_factory)
    return respuesta_woocommerce(resultado, log_webhook_woocommerce)


@router.api_route(
    '/shopify/orden',
    methods=['POST', 'OPTIONS'],
    status_code=status.HTTP_200_OK,
    summary='Sincroniza el estado de una orden desde un webhook de Shopify',
    tags=[Tags.WEBHOOKS, Tags.SHOPIFY],
    dependencies=[Depends(hmac_validation_shopify)],
)
async def recibir_orden_shopify(
    request: Request,
    config: ConfigDep,
    session_factory: SessionFactoryDep,
):
    if request.method == 'OPTIONS':
        return respuesta_preflight()

    shop_domain = request.headers.get('x-shopify-shop-domain')
    log_webhook_shopify.info(f'Webhook {request.headers.get("x-shopify-topic")} de {shop_domain}')

    body = await request.body()
    resultado = await sincronizar_orden_shopify(body, shop_domain, config, session_factory)
    return respuesta_shopify(resultado, log_webhook_shopify)
