# tests/conftest.py
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from loviq.config import Config, get_config
from loviq.main import app
from loviq.models.db.session import get_session_factory


class FabricaSesionesFalsa:
    """Reemplaza sesion_privilegiada: registra cada construcción y entrega una sesión simulada."""

    def __init__(self):
        self.configs: list[Config] = []
        self.sesion = AsyncMock()
        self.sesion.add = MagicMock()

    @property
    def construcciones(self) -> int:
        return len(self.configs)

    @asynccontextmanager
    async def __call__(self, config: Config):
        self.configs.append(config)
        yield self.sesion


@pytest.fixture
def settings():
    """Configuración con base de datos y secreto de Shopify."""
    return Config(
        environment='test',
        db_host='db.loviq.test',
        db_password='service_role_key',
        db_name='loviq_test',
        webhook_secret_shopify='shpss_test_secret',
        public_api_url='https://api.loviq.test',
    )


@pytest.fixture
def settings_sin_db():
    return Config(environment='test', db_host='', db_password='')


@pytest.fixture
def fabrica_sesiones():
    return FabricaSesionesFalsa()


@pytest.fixture
def make_client(fabrica_sesiones):
    """Cliente de pruebas con la configuración y la fábrica de sesiones sobreescritas."""
    clients = []

    def _make(config: Config) -> TestClient:
        app.dependency_overrides[get_config] = lambda: config
        app.dependency_overrides[get_session_factory] = lambda: fabrica_sesiones
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
    app.dependency_overrides.clear()


@pytest.fixture
def test_client(make_client, settings):
    return make_client(settings)
