# loviq/internal/webhooks/shopify.py
from pydantic import ValidationError

from loviq.config import Config
from loviq.internal.gen.utilities import DateTz
from loviq.internal.query.ordenes import OrdenQuery, ShopifySyncLogQuery, TiendaQuery
from loviq.internal.webhooks.resultado import (
    Motivo,
    ResultadoWebhook,
    WebhookFallido,
    WebhookOmitido,
    WebhookProcesado,
)
from loviq.models.db.ordenes import EstadoOrden, OrdenUpdate, ShopifySyncLogCreate
from loviq.models.db.session import SessionFactory
from loviq.models.pydantic.shopify.payloads import FinancialStatus, FulfillmentStatus, OrdenShopify


def mapear_estado_shopify(orden: OrdenShopify) -> EstadoOrden:
    """
    Estado de Loviq a partir de financial_status, fulfillment_status y cancelled_at.
    Una orden pagada sigue pending hasta que se despacha.
    """
    if orden.cancelled_at:
        return EstadoOrden.CANCELLED

    if orden.financial_status == FinancialStatus.REFUNDED.value:
        return EstadoOrden.REFUNDED

    if orden.financial_status == FinancialStatus.PAID.value:
        if orden.fulfillment_status == FulfillmentStatus.FULFILLED.value:
            return EstadoOrden.COMPLETED
        return EstadoOrden.PENDING

    if orden.financial_status == FinancialStatus.PARTIALLY_REFUNDED.value:
        return EstadoOrden.REFUNDED

    return EstadoOrden.PENDING


async def sincronizar_orden_shopify(
    body: bytes,
    shop_domain: str | None,
    config: Config,
    session_factory: SessionFactory,
) -> ResultadoWebhook:
    try:
        return await _sincronizar(body, shop_domain, config, session_factory)
    except Exception as e:
        return WebhookFallido(Motivo.EXCEPCION, str(e) or type(e).__name__)


async def _sincronizar(
    body: bytes,
    shop_domain: str | None,
    config: Config,
    session_factory: SessionFactory,
) -> ResultadoWebhook:
    if not config.db_configurada:
        return WebhookFallido(Motivo.SIN_CONFIGURACION, 'Server configuration error')

    try:
        orden_shopify = OrdenShopify.model_validate_json(body)
    except ValidationError as e:
        return WebhookFallido(Motivo.CUERPO_INVALIDO, str(e))

    async with session_factory(config) as session:
        tienda = None
        if shop_domain:
            tienda = await TiendaQuery().get_shopify_by_domain(session, shop_domain)
        if tienda is None or tienda.id is None:
            return WebhookOmitido(Motivo.TIENDA_NO_ENCONTRADA, 'Webhook received but store not found')

        orden_query = OrdenQuery()
        shopify_order_id = str(orden_shopify.id)
        orden = await orden_query.get_by_external_id(session, shopify_order_id)
        if orden is None or orden.id is None:
            return WebhookOmitido(Motivo.ORDEN_NO_ENCONTRADA, 'Webhook received but order not found in Loviq')

        estado_anterior = orden.status
        estado_nuevo = mapear_estado_shopify(orden_shopify).value
        if estado_anterior == estado_nuevo:
            return WebhookOmitido(Motivo.ESTADO_SIN_CAMBIOS, 'Order status unchanged')

        ahora = DateTz.local()
        await orden_query.update(session, OrdenUpdate(status=estado_nuevo, updated_at=ahora), orden.id)

        await ShopifySyncLogQuery().create(
            session,
            ShopifySyncLogCreate(
                store_id=tienda.id,
                sync_type='orders',
                status='success',
                started_at=ahora,
                finished_at=DateTz.local(),
                message=(
                    f'Order #{orden.id} status updated: {estado_anterior} -> {estado_nuevo} '
                    f'(Shopify {orden_shopify.name})'
                ),
            ),
        )

    return WebhookProcesado(
        mensaje=f'Order status updated from {estado_anterior} to {estado_nuevo}',
        filas_afectadas=1,
        detalle={
            'loviq_order_id': orden.id,
            'shopify_order_id': shopify_order_id,
            'shopify_order_name': orden_shopify.name,
            'old_status': estado_anterior,
            'new_status': estado_nuevo,
        },
    )
