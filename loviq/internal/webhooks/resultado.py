# loviq/internal/webhooks/resultado.py

"""
Resultado interno del procesamiento de un webhook.

Los handlers no lanzan excepciones hacia la plataforma que envía el webhook: todo termina
en uno de estos tres tipos. La traducción a la respuesta HTTP se hace en un solo lugar
(respuesta_woocommerce / respuesta_shopify) después de registrar el resultado en el log.
"""

from dataclasses import dataclass, field
from enum import Enum
from logging import Logger
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse


class Motivo(str, Enum):
    CUERPO_INVALIDO = 'cuerpo_invalido'
    SIN_CONFIGURACION = 'sin_configuracion'
    SIN_IDENTIFICADOR = 'sin_identificador'
    TIENDA_NO_ENCONTRADA = 'tienda_no_encontrada'
    ORDEN_NO_ENCONTRADA = 'orden_no_encontrada'
    ESTADO_SIN_CAMBIOS = 'estado_sin_cambios'
    EXCEPCION = 'excepcion'


@dataclass(frozen=True)
class WebhookProcesado:
    mensaje: str
    filas_afectadas: int | None = None
    detalle: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WebhookOmitido:
    motivo: Motivo
    mensaje: str


@dataclass(frozen=True)
class WebhookFallido:
    motivo: Motivo
    error: str


ResultadoWebhook = WebhookProcesado | WebhookOmitido | WebhookFallido


def registrar_resultado(resultado: ResultadoWebhook, logger: Logger) -> None:
    if isinstance(resultado, WebhookFallido):
        logger.error(f'Webhook fallido ({resultado.motivo.value}): {resultado.error}')
    elif isinstance(resultado, WebhookOmitido):
        logger.warning(f'Webhook omitido ({resultado.motivo.value}): {resultado.mensaje}')
    elif resultado.filas_afectadas == 0:
        # Ninguna orden con ese external_order_id, para el remitente sigue siendo éxito.
        logger.warning(f'{resultado.mensaje}: 0 filas afectadas {resultado.detalle}')
    else:
        logger.info(f'{resultado.mensaje} {resultado.detalle}')


def respuesta_woocommerce(resultado: ResultadoWebhook, logger: Logger) -> JSONResponse:
    """Siempre 200 con {"success": true}, sin importar el resultado."""
    registrar_resultado(resultado, logger)
    return JSONResponse(content={'success': True}, status_code=status.HTTP_200_OK)


def respuesta_shopify(resultado: ResultadoWebhook, logger: Logger) -> JSONResponse:
    """Siempre 200 para que Shopify no reintente; success es False solo en fallos."""
    registrar_resultado(resultado, logger)
    if isinstance(resultado, WebhookFallido):
        content: dict[str, Any] = {'success': False, 'error': resultado.error}
    else:
        content = {'success': True, 'message': resultado.mensaje}
        if isinstance(resultado, WebhookProcesado):
            content.update(resultado.detalle)
    return JSONResponse(content=content, status_code=status.HTTP_200_OK)
