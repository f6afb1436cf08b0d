# loviq/internal/query/base.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel
from typing import Generic, TypeVar

from loviq.internal.log import factory_logger

ModelDB = TypeVar('ModelDB', bound=SQLModel)
ModelCreate = TypeVar('ModelCreate', bound=SQLModel)


log_base_query = factory_logger('base_query', file=True)


class BaseQuery(Generic[ModelDB, ModelCreate]):
    def __init__(self, model_db: type[ModelDB], model_create: type[ModelCreate]) -> None:
        self.model_db = model_db
        self.model_create = model_create

    async def get(self, session: AsyncSession, id: int | str) -> ModelDB | None:
        """Obtiene un objeto por su ID"""
        result = await session.get(self.model_db, id)
        return result

    async def create(self, session: AsyncSession, obj: ModelCreate) -> ModelDB:
        """Crea un nuevo objeto de forma asíncrona."""
        create_model = self.model_create.model_validate(obj.model_dump())  # Se garantiza que el objeto sea del tipo correcto
        db_model = self.model_db(**create_model.model_dump())
        session.add(db_model)
        await session.commit()
        await session.refresh(db_model)  # Refresca para obtener el ID generado por la BD
        return db_model

    async def update(self, session: AsyncSession, new_obj: SQLModel, pk: int | str) -> ModelDB:
        """Actualiza un objeto existente de forma asíncrona."""
        db_obj = await session.get(self.model_db, pk)
        if not db_obj:
            exception = ValueError(f'No existe el objeto con id {pk}')
            log_base_query.error(str(exception))
            raise exception

        update_data = new_obj.model_dump(exclude_unset=True)
        db_obj.sqlmodel_update(update_data)

        session.add(db_obj)
        await session.commit()
        await session.refresh(db_obj)
        return db_obj
