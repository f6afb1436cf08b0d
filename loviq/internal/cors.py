# loviq/internal/cors.py
from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

# Encabezados del preflight que responden las rutas excluidas.
CORS_HEADERS_PERMISIVOS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': '*',
    'Access-Control-Allow-Headers': '*',
}


class CORSMiddlewareConExclusiones(CORSMiddleware):
    """
    CORSMiddleware que no intercepta las rutas bajo exclude_prefixes.
    Esas rutas (webhooks) responden su propio OPTIONS con cuerpo vacío.
    """

    def __init__(self, app: ASGIApp, exclude_prefixes: tuple[str, ...] = (), **kwargs) -> None:
        super().__init__(app, **kwargs)
        self.exclude_prefixes = exclude_prefixes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope['type'] == 'http' and self.exclude_prefixes and scope['path'].startswith(self.exclude_prefixes):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
