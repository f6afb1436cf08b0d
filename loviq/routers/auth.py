# loviq/routers/auth.py
from fastapi import Request, HTTPException, status
import hmac
import hashlib
import base64

from loviq.config import ConfigDep
from loviq.internal.log import factory_logger

log_auth = factory_logger('auth')


class AuthException:
    hmac_validation_failed = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail='Invalid HMAC',
    )


def calcular_hmac_shopify(secret: str, body: bytes) -> str:
    digest = hmac.new(secret.encode('utf-8'), msg=body, digestmod=hashlib.sha256).digest()
    return base64.b64encode(digest).decode('utf-8')


# Webhooks Shopify
async def hmac_validation_shopify(request: Request, config: ConfigDep) -> bool:
    """
    Valida la firma del webhook de Shopify.
    https://shopify.dev/docs/apps/build/webhooks/subscribe/https#step-2-validate-the-origin-of-your-webhook-to-ensure-its-coming-from-shopify

    Sin SHOPIFY_WEBHOOK_SECRET configurado no se valida (solo se deja advertencia en el log).
    El preflight OPTIONS no trae firma y tampoco se valida.
    """
    if request.method == 'OPTIONS':
        return False

    if not config.webhook_secret_shopify:
        log_auth.warning('Validación HMAC de Shopify omitida, no hay secreto configurado')
        return False

    # 1. HMAC-SHA256 del cuerpo crudo con el secreto como clave, codificado en Base64.
    body = await request.body()
    calculated_hmac_base64 = calcular_hmac_shopify(config.webhook_secret_shopify, body)

    # 2. Comparación timing-safe con el encabezado que envía Shopify.
    received_hmac = request.headers.get('x-shopify-hmac-sha256', '')
    if not hmac.compare_digest(calculated_hmac_base64, received_hmac):
        log_auth.error(f'HMAC inválido para webhook de {request.headers.get("x-shopify-shop-domain")}')
        raise AuthException.hmac_validation_failed
    return True
