# tests/test_shopify_webhook.py
import json
from unittest.mock import ANY, AsyncMock

import pytest

from loviq.config import Config
from loviq.internal.query.ordenes import OrdenQuery, ShopifySyncLogQuery, TiendaQuery
from loviq.internal.webhooks.shopify import mapear_estado_shopify
from loviq.models.db.ordenes import EstadoOrden, Orden, OrdenUpdate, ShopifySyncLogCreate, Tienda
from loviq.models.pydantic.shopify.payloads import OrdenShopify
from loviq.routers.auth import calcular_hmac_shopify

URL = '/webhooks/shopify/orden'
SHOP = 'loja-teste.myshopify.com'


def orden_payload(**kwargs) -> dict:
    payload = {
        'id': 450789469,
        'name': '#1001',
        'email': 'cliente@example.com',
        'financial_status': 'paid',
        'fulfillment_status': 'fulfilled',
        'cancelled_at': None,
        'total_price': '199.00',
        'currency': 'BRL',
    }
    payload.update(kwargs)
    return payload


def post_firmado(client, payload, secret: str, shop: str | None = SHOP):
    body = json.dumps(payload).encode()
    headers = {
        'x-shopify-hmac-sha256': calcular_hmac_shopify(secret, body),
        'x-shopify-topic': 'orders/updated',
    }
    if shop:
        headers['x-shopify-shop-domain'] = shop
    return client.post(URL, content=body, headers=headers)


@pytest.fixture
def queries(mocker):
    """Mocks de las consultas usadas por el webhook de Shopify."""
    return {
        'tienda': mocker.patch.object(
            TiendaQuery,
            'get_shopify_by_domain',
            new_callable=AsyncMock,
            return_value=Tienda(id=3, name=SHOP, store_type='shopify'),
        ),
        'orden': mocker.patch.object(
            OrdenQuery,
            'get_by_external_id',
            new_callable=AsyncMock,
            return_value=Orden(id=42, external_order_id='450789469', status='pending'),
        ),
        'update': mocker.patch.object(OrdenQuery, 'update', new_callable=AsyncMock),
        'sync_log': mocker.patch.object(ShopifySyncLogQuery, 'create', new_callable=AsyncMock),
    }


@pytest.mark.parametrize(
    'cambios, esperado',
    [
        ({'cancelled_at': '2024-05-01T10:00:00-03:00', 'financial_status': 'paid'}, EstadoOrden.CANCELLED),
        ({'financial_status': 'refunded', 'fulfillment_status': 'fulfilled'}, EstadoOrden.REFUNDED),
        ({'financial_status': 'paid', 'fulfillment_status': 'fulfilled'}, EstadoOrden.COMPLETED),
        ({'financial_status': 'paid', 'fulfillment_status': None}, EstadoOrden.PENDING),
        ({'financial_status': 'paid', 'fulfillment_status': 'partial'}, EstadoOrden.PENDING),
        ({'financial_status': 'partially_refunded'}, EstadoOrden.REFUNDED),
        ({'financial_status': 'authorized', 'fulfillment_status': None}, EstadoOrden.PENDING),
        ({'financial_status': 'voided', 'fulfillment_status': None}, EstadoOrden.PENDING),
    ],
)
def test_mapear_estado_shopify(cambios, esperado):
    orden = OrdenShopify(**orden_payload(**cambios))
    assert mapear_estado_shopify(orden) == esperado


def test_actualiza_estado_y_registra_sync_log(test_client, settings, fabrica_sesiones, queries):
    response = post_firmado(test_client, orden_payload(), settings.webhook_secret_shopify)

    assert response.status_code == 200
    assert response.json() == {
        'success': True,
        'message': 'Order status updated from pending to completed',
        'loviq_order_id': 42,
        'shopify_order_id': '450789469',
        'shopify_order_name': '#1001',
        'old_status': 'pending',
        'new_status': 'completed',
    }
    queries['tienda'].assert_awaited_once_with(fabrica_sesiones.sesion, SHOP)
    queries['orden'].assert_awaited_once_with(fabrica_sesiones.sesion, '450789469')

    queries['update'].assert_awaited_once_with(fabrica_sesiones.sesion, ANY, 42)
    orden_update = queries['update'].await_args.args[1]
    assert isinstance(orden_update, OrdenUpdate)
    assert orden_update.status == 'completed'
    assert orden_update.updated_at is not None

    sync_log = queries['sync_log'].await_args.args[1]
    assert isinstance(sync_log, ShopifySyncLogCreate)
    assert sync_log.store_id == 3
    assert sync_log.sync_type == 'orders'
    assert sync_log.message == 'Order #42 status updated: pending -> completed (Shopify #1001)'


def test_hmac_invalido(test_client, queries):
    response = post_firmado(test_client, orden_payload(), 'otro-secreto')

    assert response.status_code == 401
    assert response.json() == {'detail': 'Invalid HMAC'}
    queries['orden'].assert_not_awaited()


def test_hmac_ausente(test_client, queries):
    response = test_client.post(URL, json=orden_payload(), headers={'x-shopify-shop-domain': SHOP})

    assert response.status_code == 401
    queries['update'].assert_not_awaited()


def test_sin_secreto_no_valida_hmac(make_client, settings, queries):
    client = make_client(Config(db_host='db', db_password='pwd'))
    response = client.post(URL, json=orden_payload(), headers={'x-shopify-shop-domain': SHOP})

    assert response.status_code == 200
    assert response.json()['new_status'] == 'completed'


def test_tienda_no_encontrada(test_client, settings, queries):
    queries['tienda'].return_value = None

    response = post_firmado(test_client, orden_payload(), settings.webhook_secret_shopify)

    assert response.status_code == 200
    assert response.json() == {'success': True, 'message': 'Webhook received but store not found'}
    queries['orden'].assert_not_awaited()


def test_sin_dominio_no_busca_tienda(test_client, settings, queries):
    response = post_firmado(test_client, orden_payload(), settings.webhook_secret_shopify, shop=None)

    assert response.json() == {'success': True, 'message': 'Webhook received but store not found'}
    queries['tienda'].assert_not_awaited()


def test_orden_no_encontrada(test_client, settings, queries):
    queries['orden'].return_value = None

    response = post_firmado(test_client, orden_payload(), settings.webhook_secret_shopify)

    assert response.json() == {'success': True, 'message': 'Webhook received but order not found in Loviq'}
    queries['update'].assert_not_awaited()


def test_estado_sin_cambios(test_client, settings, queries):
    queries['orden'].return_value = Orden(id=42, external_order_id='450789469', status='completed')

    response = post_firmado(test_client, orden_payload(), settings.webhook_secret_shopify)

    assert response.json() == {'success': True, 'message': 'Order status unchanged'}
    queries['update'].assert_not_awaited()
    queries['sync_log'].assert_not_awaited()


def test_error_en_update_responde_200(test_client, settings, queries):
    queries['update'].side_effect = ValueError('No existe el objeto con id 42')

    response = post_firmado(test_client, orden_payload(), settings.webhook_secret_shopify)

    assert response.status_code == 200
    assert response.json() == {'success': False, 'error': 'No existe el objeto con id 42'}


def test_cuerpo_invalido(test_client, settings, queries):
    body = b'{"name": "#1001"'
    headers = {
        'x-shopify-hmac-sha256': calcular_hmac_shopify(settings.webhook_secret_shopify, body),
        'x-shopify-shop-domain': SHOP,
    }
    response = test_client.post(URL, content=body, headers=headers)

    assert response.status_code == 200
    assert response.json()['success'] is False
    queries['tienda'].assert_not_awaited()


def test_sin_configuracion_db(make_client, settings, fabrica_sesiones, queries):
    client = make_client(Config(webhook_secret_shopify=settings.webhook_secret_shopify))

    response = post_firmado(client, orden_payload(), settings.webhook_secret_shopify)

    assert response.status_code == 200
    assert response.json() == {'success': False, 'error': 'Server configuration error'}
    assert fabrica_sesiones.construcciones == 0


def test_preflight_sin_hmac(test_client, fabrica_sesiones, queries):
    headers = {
        'Origin': 'https://admin.loviq.test',
        'Access-Control-Request-Method': 'POST',
        'Access-Control-Request-Headers': 'x-shopify-hmac-sha256, content-type',
    }
    response = test_client.options(URL, headers=headers)

    assert response.status_code == 200
    assert response.content == b''
    assert fabrica_sesiones.construcciones == 0
    queries['tienda'].assert_not_awaited()
