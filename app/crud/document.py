# app/crud/document.py
import base64
import binascii
import logging
from datetime import date
from typing import List, Literal, Optional

from sqlalchemy import select
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFoundError, PayloadTooLargeError
from app.crud.base import CRUDBase
from app.crud.mapping import to_backend
from app.models.document import Document
from app.models.student import Student
from app.schemas.document import DocumentCreate

logger = logging.getLogger(__name__)

Scope = Literal["all", "general", "student"]

def to_data_url(content: bytes, mime: Optional[str]) -> str:
    b64 = base64.b64encode(content).decode("ascii")
    return f"data:{mime or 'application/octet-stream'};base64,{b64}"

def payload_size(file_url: str) -> int:
    """Tamanho em bytes do conteúdo; data URL é medida já decodificada."""
    if file_url.startswith("data:") and ";base64," in file_url:
        encoded = file_url.split(";base64,", 1)[1]
        try:
            return len(base64.b64decode(encoded, validate=False))
        except (binascii.Error, ValueError):
            return len(encoded)
    return len(file_url.encode("utf-8"))

def _missing_table(exc: Exception) -> bool:
    orig = getattr(exc, "orig", None)
    if getattr(orig, "sqlstate", None) == "42P01" or getattr(orig, "pgcode", None) == "42P01":
        return True
    text = str(orig or exc).lower()
    return "no such table" in text or ("relation" in text and "does not exist" in text)

class CRUDDocument(CRUDBase[Document, DocumentCreate, DocumentCreate]):
    not_found_code = "DOCUMENT_NOT_FOUND"
    not_found_message = "Documento não encontrado."

    def list_recent(self, db: Session, scope: Scope = "all", student_id: Optional[int] = None) -> List[Document]:
        stmt = select(Document)
        if student_id is not None:
            stmt = stmt.where(Document.student_id == student_id)
        elif scope == "general":
            stmt = stmt.where(Document.student_id.is_(None))
        elif scope == "student":
            stmt = stmt.where(Document.student_id.is_not(None))
        stmt = stmt.order_by(Document.upload_date.desc(), Document.id.desc())
        try:
            return list(db.execute(stmt).scalars().all())
        except (OperationalError, ProgrammingError) as exc:
            if not _missing_table(exc):
                raise
            # coleção ainda não criada: lista vazia, não erro
            db.rollback()
            logger.warning("Tabela de documentos ausente: %s", exc.orig)
            return []

    def create_item(self, db: Session, obj_in: DocumentCreate, today: Optional[date] = None) -> Document:
        size = payload_size(obj_in.file_url)
        if size > settings.MAX_DOCUMENT_BYTES:
            raise PayloadTooLargeError(
                "DOCUMENT_TOO_LARGE",
                f"Arquivo com {size} bytes excede o limite de {settings.MAX_DOCUMENT_BYTES} bytes.",
            )
        if obj_in.student_id is not None and db.get(Student, obj_in.student_id) is None:
            raise NotFoundError("STUDENT_NOT_FOUND", "Servidor não encontrado.")
        data = to_backend("document", obj_in.model_dump(by_alias=True))
        data["upload_date"] = today or date.today()
        doc = self.create(db, data)
        logger.info("Documento id=%s gravado (%s bytes, aluno=%s)", doc.id, size, doc.student_id or "geral")
        return doc

document_crud = CRUDDocument(Document)
