# loviq/routers/woocommerce.py
from fastapi import APIRouter, HTTPException, status

from loviq.config import ConfigDep
from loviq.internal.integrations.base import ClientException
from loviq.internal.integrations.woocommerce import WooCommerceClient
from loviq.internal.log import factory_logger
from loviq.models.pydantic.woocommerce.webhooks import RegistroWebhooks, RegistroWebhooksResponse

log_woocommerce_router = factory_logger('woocommerce_router', file=True)

router = APIRouter(
    prefix='/woocommerce',
    tags=['WooCommerce'],
)


@router.post(
    '/webhooks',
    response_model=RegistroWebhooksResponse,
    status_code=status.HTTP_200_OK,
    summary='Registra webhooks en una tienda WooCommerce',
    description='Crea un webhook activo por cada topic apuntando a delivery_url.',
)
async def registrar_webhooks_woocommerce(registro: RegistroWebhooks, config: ConfigDep):
    client = WooCommerceClient(
        registro.site_url,
        registro.consumer_key,
        registro.consumer_secret,
        timeout=config.woocommerce_timeout,
    )
    results = []
    try:
        for topic in registro.topics:
            results.append(await client.registrar_webhook(topic, registro.delivery_url))
    except ClientException as e:
        log_woocommerce_router.error(f'Error al registrar webhooks en {registro.site_url}: {e}')
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.msg or str(e))
    except Exception as e:
        log_woocommerce_router.error(f'Error al registrar webhooks en {registro.site_url}: {e}')
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return RegistroWebhooksResponse(success=True, results=results)
