# app/api/v1/documents.py
from __future__ import annotations

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.config import settings
from app.core.errors import ConfirmationRequiredError, PayloadTooLargeError
from app.core.rbac import require_staff
from app.crud.document import document_crud, to_data_url
from app.crud.mapping import entity_of
from app.models.document import Document
from app.schemas.document import DocumentCreate, DocumentOut

router = APIRouter(dependencies=[Depends(require_staff)])

def _to_schema(d: Document) -> DocumentOut:
    return DocumentOut.model_validate(entity_of("document", d))

@router.get("/", response_model=List[DocumentOut])
def list_documents(
    scope: Literal["all", "general", "student"] = Query("all"),
    student_id: Optional[int] = Query(None, alias="studentId"),
    db: Session = Depends(get_db),
):
    return [_to_schema(d) for d in document_crud.list_recent(db, scope=scope, student_id=student_id)]

@router.post("/", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
def create_document(body: DocumentCreate, db: Session = Depends(get_db)):
    return _to_schema(document_crud.create_item(db, body))

@router.post("/upload", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
def upload_document(
    file: UploadFile = File(...),
    title: Optional[str] = Form(None),
    student_id: Optional[int] = Form(None, alias="studentId"),
    db: Session = Depends(get_db),
):
    limit = settings.MAX_DOCUMENT_BYTES
    content = file.file.read(limit + 1)
    if len(content) > limit:
        raise PayloadTooLargeError(
            "DOCUMENT_TOO_LARGE",
            f"Arquivo excede o limite de {limit} bytes.",
        )
    body = DocumentCreate(
        title=title or file.filename or "Documento",
        file_name=file.filename or "arquivo",
        file_url=to_data_url(content, file.content_type),
        file_type=file.content_type,
        student_id=student_id,
    )
    return _to_schema(document_crud.create_item(db, body))

@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_document(
    document_id: int,
    confirm: bool = Query(False, description="Confirmação explícita da remoção"),
    db: Session = Depends(get_db),
):
    if not confirm:
        raise ConfirmationRequiredError("Deseja realmente excluir este documento? Envie confirm=true.")
    document_crud.remove(db, document_id)
