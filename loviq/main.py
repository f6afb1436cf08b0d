# main.py
from fastapi import FastAPI

from loviq.internal.cors import CORSMiddlewareConExclusiones
from loviq.routers import shopify, webhooks, woocommerce

app = FastAPI(
    title='API de integraciones Loviq',
    description='Webhooks e integraciones de Loviq con Shopify y WooCommerce.',
    version='1.0.0',
)

# Los webhooks aceptan cualquier origen y responden su propio preflight.
app.add_middleware(
    CORSMiddlewareConExclusiones,
    exclude_prefixes=(webhooks.router.prefix,),
    allow_origins=['*'],
    allow_methods=['POST', 'OPTIONS'],
    allow_headers=[
        'authorization',
        'x-client-info',
        'apikey',
        'content-type',
    ],
)

# Webhooks entrantes de Shopify y WooCommerce
app.include_router(webhooks.router)
# Registro de webhooks en tiendas Shopify y WooCommerce
app.include_router(shopify.router)
app.include_router(woocommerce.router)


@app.get('/', tags=['Root'])
async def read_root():
    """Ruta raíz de la API."""
    return {'message': 'API Loviq'}
