# loviq/config.py
from dataclasses import dataclass
from enum import Enum
from os import getenv
from typing import Annotated

from dotenv import load_dotenv
from fastapi import Depends


class Environments(Enum):
    DEVELOPMENT = 'development'
    STAGING = 'staging'
    PRODUCTION = 'production'


@dataclass(frozen=True)
class Config:
    # Environment
    environment: str = Environments.DEVELOPMENT.value

    # Database. Host y password sin valor por defecto: su ausencia significa "no configurado".
    db_host: str = ''
    db_port: int = 5432
    db_user: str = 'postgres'
    db_password: str = ''
    db_name: str = 'postgres'

    # General
    local_timezone: str = 'America/Sao_Paulo'

    # Shopify
    webhook_secret_shopify: str = ''
    shopify_api_version: str = '2024-01'
    # URL pública con la que Shopify alcanza esta API, p. ej. https://api.loviq.com
    public_api_url: str = ''
    # Receptor de inventario (otro servicio). Sin valor no se registran esos topics.
    shopify_inventory_webhook_url: str = ''

    # WooCommerce
    woocommerce_timeout: int = 30

    # Logs
    logs_dir: str = 'logs'

    @property
    def production(self) -> bool:
        return self.environment in ['production', 'prod']

    @property
    def db_configurada(self) -> bool:
        """Endpoint de la base de datos y credencial privilegiada presentes."""
        return bool(self.db_host) and bool(self.db_password)

    @classmethod
    def from_env(cls) -> 'Config':
        load_dotenv()
        return cls(
            environment=str(getenv('ENVIRONMENT', 'development')).lower(),
            db_host=str(getenv('DB_HOST', '')),
            db_port=int(getenv('DB_PORT', 5432)),
            db_user=str(getenv('DB_USER', 'postgres')),
            db_password=str(getenv('DB_PASSWORD', '')),
            db_name=str(getenv('DB_NAME', 'postgres')),
            local_timezone=str(getenv('LOCAL_TIMEZONE', 'America/Sao_Paulo')),
            webhook_secret_shopify=str(getenv('SHOPIFY_WEBHOOK_SECRET', '')),
            shopify_api_version=str(getenv('SHOPIFY_API_VERSION', '2024-01')),
            public_api_url=str(getenv('PUBLIC_API_URL', '')),
            shopify_inventory_webhook_url=str(getenv('SHOPIFY_INVENTORY_WEBHOOK_URL', '')),
            woocommerce_timeout=int(getenv('WOOCOMMERCE_TIMEOUT', 30)),
            logs_dir=str(getenv('LOGS_DIR', 'logs')),
        )


config = Config.from_env()


def get_config() -> Config:
    """Dependencia de FastAPI, se sobreescribe en pruebas con una configuración fija."""
    return config


ConfigDep = Annotated[Config, Depends(get_config)]
