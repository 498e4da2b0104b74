# app/db/base.py
from app.db.base_class import Base

# Carrega módulos para registrar tabelas no metadata (Alembic/testes):
import app.models.user            # noqa: F401
import app.models.student         # noqa: F401
import app.models.training_slot   # noqa: F401
import app.models.attendance      # noqa: F401
import app.models.document        # noqa: F401

__all__ = ["Base"]
