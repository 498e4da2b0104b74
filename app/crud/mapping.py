# app/crud/mapping.py
"""
Tradução de nomes entre o banco (snake_case) e a API (camelCase).

Cada entidade tem uma tabela de pares (campo_api, coluna). As funções são
totais: chave desconhecida é erro, nunca é descartada em silêncio, e
from_backend(to_backend(x)) == x para todo campo preenchido.
"""
from typing import Any, Dict, Mapping, Tuple

from sqlalchemy import inspect

FieldPairs = Tuple[Tuple[str, str], ...]

STUDENT_FIELDS: FieldPairs = (
    ("id", "id"),
    ("cpf", "cpf"),
    ("name", "name"),
    ("department", "department"),
    ("phone", "phone"),
    ("birthDate", "birth_date"),
    ("age", "age"),
    ("gender", "gender"),
    ("blocked", "blocked"),
    ("onWaitlist", "on_waitlist"),
    ("modality", "modality"),
    ("trainingDays", "training_days"),
    ("trainingTime", "training_time"),
    ("turma", "turma"),
    ("createdAt", "created_at"),
)

ATTENDANCE_FIELDS: FieldPairs = (
    ("id", "id"),
    ("studentCpf", "student_cpf"),
    ("timestamp", "timestamp"),
    ("hour", "hour"),
    ("photo", "photo_url"),
)

DOCUMENT_FIELDS: FieldPairs = (
    ("id", "id"),
    ("title", "title"),
    ("fileName", "file_name"),
    ("uploadDate", "upload_date"),
    ("fileUrl", "file_url"),
    ("fileType", "file_type"),
    ("studentId", "student_id"),
)

USER_FIELDS: FieldPairs = (
    ("id", "id"),
    ("name", "name"),
    ("email", "email"),
    ("cpf", "cpf"),
    ("role", "role"),
    ("active", "active"),
    ("hashedPassword", "hashed_password"),
    ("createdAt", "created_at"),
)

_ENTITIES: Dict[str, FieldPairs] = {
    "student": STUDENT_FIELDS,
    "attendance": ATTENDANCE_FIELDS,
    "document": DOCUMENT_FIELDS,
    "user": USER_FIELDS,
}

def _pairs(entity: str) -> FieldPairs:
    try:
        return _ENTITIES[entity]
    except KeyError:
        raise KeyError(f"Entidade desconhecida: {entity}") from None

def _translate(data: Mapping[str, Any], table: Dict[str, str], entity: str) -> Dict[str, Any]:
    unknown = set(data) - set(table)
    if unknown:
        raise KeyError(f"Campos desconhecidos para {entity}: {', '.join(sorted(unknown))}")
    return {table[k]: v for k, v in data.items()}

def to_backend(entity: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """camelCase (API) -> snake_case (colunas)."""
    return _translate(data, dict(_pairs(entity)), entity)

def from_backend(entity: str, row: Mapping[str, Any]) -> Dict[str, Any]:
    """snake_case (colunas) -> camelCase (API)."""
    return _translate(row, {col: api for api, col in _pairs(entity)}, entity)

def row_of(obj: Any) -> Dict[str, Any]:
    """Colunas carregadas de um objeto ORM como dict."""
    return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}

def entity_of(entity: str, obj: Any) -> Dict[str, Any]:
    return from_backend(entity, row_of(obj))
