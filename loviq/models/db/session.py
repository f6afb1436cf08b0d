# loviq/models/db/session.py

# Inyeccion de dependencias
from fastapi import Depends
from typing import Annotated, AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from sqlalchemy import URL
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from loviq.config import Config


def database_url(config: Config) -> URL:
    return URL.create(
        'postgresql+psycopg',
        username=config.db_user,
        password=config.db_password,
        host=config.db_host,
        port=config.db_port,
        database=config.db_name,
    )


@asynccontextmanager
async def sesion_privilegiada(config: Config) -> AsyncIterator[AsyncSession]:
    """
    Sesión con el usuario privilegiado, válida solo para una solicitud.
    No hay pool: cada webhook abre su conexión y el engine se descarta al salir.
    """
    engine = create_async_engine(database_url(config), poolclass=NullPool)
    try:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            yield session
    finally:
        await engine.dispose()


SessionFactory = Callable[[Config], AbstractAsyncContextManager[AsyncSession]]


def get_session_factory() -> SessionFactory:
    return sesion_privilegiada


SessionFactoryDep = Annotated[SessionFactory, Depends(get_session_factory)]
