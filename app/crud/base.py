# app/crud/base.py
import logging
from typing import TypeVar, Generic, Type, Any, Optional, List, Dict
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from pydantic import BaseModel
from app.core.errors import NotFoundError
from app.db.base_class import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
CreateSchema = TypeVar("CreateSchema", bound=BaseModel)
UpdateSchema = TypeVar("UpdateSchema", bound=BaseModel)

class CRUDBase(Generic[ModelType, CreateSchema, UpdateSchema]):
    not_found_code = "NOT_FOUND"
    not_found_message = "Registro não encontrado."

    def __init__(self, model: Type[ModelType]): self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.get(self.model, id)

    def get_or_404(self, db: Session, id: Any) -> ModelType:
        obj = self.get(db, id)
        if obj is None:
            raise NotFoundError(self.not_found_code, self.not_found_message)
        return obj

    def commit(self, db: Session, *objs: ModelType) -> None:
        """Commit atômico: em falha desfaz tudo e repassa o erro (sem retry)."""
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Falha ao gravar %s", self.model.__tablename__)
            raise
        for obj in objs:
            db.refresh(obj)

    def create(self, db: Session, obj_in: CreateSchema | Dict[str, Any], extra: Dict[str, Any] | None=None) -> ModelType:
        data = dict(obj_in) if isinstance(obj_in, dict) else obj_in.model_dump()
        if extra: data.update(extra)
        obj = self.model(**data)
        db.add(obj)
        self.commit(db, obj)
        return obj

    def update(self, db: Session, db_obj: ModelType, obj_in: UpdateSchema | Dict[str, Any]) -> ModelType:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        for f,v in data.items(): setattr(db_obj, f, v)
        db.add(db_obj)
        self.commit(db, db_obj)
        return db_obj

    def remove(self, db: Session, id: Any) -> ModelType:
        obj = self.get_or_404(db, id)
        db.delete(obj)
        self.commit(db)
        return obj
