# loviq/internal/webhooks/woocommerce.py
import json
from typing import Any

from loviq.config import Config
from loviq.internal.query.ordenes import OrdenQuery
from loviq.internal.webhooks.resultado import (
    Motivo,
    ResultadoWebhook,
    WebhookFallido,
    WebhookOmitido,
    WebhookProcesado,
)
from loviq.models.db.session import SessionFactory


def _vacio(valor: Any) -> bool:
    """Valores que el emisor trata como ausentes: None, '', 0, false y NaN."""
    if valor is None or isinstance(valor, str):
        return not valor
    if isinstance(valor, (bool, int, float)):
        return not valor or valor != valor
    return False


def _como_texto(valor: Any) -> str:
    """Conversión a texto con las reglas de String() en JavaScript."""
    if isinstance(valor, str):
        return valor
    if isinstance(valor, bool):
        return 'true' if valor else 'false'
    if isinstance(valor, float):
        if valor != valor:
            return 'NaN'
        if valor in (float('inf'), float('-inf')):
            return 'Infinity' if valor > 0 else '-Infinity'
        if valor.is_integer():
            return str(int(valor))
    if isinstance(valor, list):
        # Los null dentro de una lista quedan como cadena vacía: [1, null, 2] -> '1,,2'
        return ','.join('' if item is None else _como_texto(item) for item in valor)
    if isinstance(valor, dict):
        return '[object Object]'
    if valor is None:
        return 'null'
    return str(valor)


def clave_externa(payload: Any) -> str | None:
    """
    Id de la orden en WooCommerce convertido a str para buscar por external_order_id.
    None si el payload no es un objeto, el id está vacío o su texto queda vacío ([] -> '').
    """
    if not isinstance(payload, dict):
        return None
    order_id = payload.get('id')
    if _vacio(order_id):
        return None
    return _como_texto(order_id) or None


async def sincronizar_estado_woocommerce(
    body: bytes,
    config: Config,
    session_factory: SessionFactory,
    orden_query: OrdenQuery | None = None,
) -> ResultadoWebhook:
    """
    Actualiza el estado de la orden cuyo external_order_id coincide con el id del webhook.

    Nunca crea órdenes ni lanza excepciones: cualquier error queda en un WebhookFallido.
    """
    try:
        return await _sincronizar(body, config, session_factory, orden_query or OrdenQuery())
    except Exception as e:
        return WebhookFallido(Motivo.EXCEPCION, f'{type(e).__name__}: {e}')


async def _sincronizar(
    body: bytes,
    config: Config,
    session_factory: SessionFactory,
    orden_query: OrdenQuery,
) -> ResultadoWebhook:
    try:
        payload = json.loads(body)
    except ValueError as e:
        return WebhookFallido(Motivo.CUERPO_INVALIDO, str(e))

    if not config.db_configurada:
        return WebhookOmitido(Motivo.SIN_CONFIGURACION, 'Falta DB_HOST o DB_PASSWORD')

    async with session_factory(config) as session:
        clave = clave_externa(payload)
        if clave is None:
            return WebhookOmitido(Motivo.SIN_IDENTIFICADOR, 'El payload no trae id de orden')

        status = payload.get('status')
        filas = await orden_query.update_status_by_external_id(session, clave, status)

    return WebhookProcesado(
        mensaje='Estado de orden WooCommerce sincronizado',
        filas_afectadas=filas,
        detalle={'external_order_id': clave, 'status': status},
    )
