# app/core/errors.py
from typing import Any, Dict, Optional

class DomainError(Exception):
    status_code = 400

    def __init__(self, code: str, message: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.extra = extra or {}

    def to_content(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, **self.extra}

class NotFoundError(DomainError):
    status_code = 404

class PolicyDeniedError(DomainError):
    status_code = 403

class ConfirmationRequiredError(DomainError):
    status_code = 428

    def __init__(self, message: str = "Confirme a remoção enviando confirm=true."):
        super().__init__("CONFIRMATION_REQUIRED", message)

class InvalidSlotError(DomainError):
    status_code = 422

class PayloadTooLargeError(DomainError):
    status_code = 413

class ConflictError(DomainError):
    status_code = 409
