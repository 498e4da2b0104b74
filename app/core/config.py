# app/core/config.py
import os
from typing import ClassVar
from pydantic import BaseModel, Field

def _default_database_url() -> str:
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return os.getenv("DATABASE_URL", f"sqlite:///{os.path.join(data_dir, 'academia.db')}")

class Settings(BaseModel):
    # Constante (não vira campo Pydantic)
    DATA_DIR: ClassVar[str] = os.path.abspath(os.getenv("DATA_DIR", "./data"))

    # Campos de configuração
    DATABASE_URL: str = Field(default_factory=_default_database_url)
    SECRET_KEY: str = Field(default_factory=lambda: os.getenv("SECRET_KEY", "CHANGE_ME_SUPER_SECRET"))
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30")))
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default_factory=lambda: int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7")))
    TIMEZONE: str = Field(default_factory=lambda: os.getenv("TIMEZONE", "America/Sao_Paulo"))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    # Regras da academia
    SLOT_CAPACITY: int = Field(default_factory=lambda: int(os.getenv("SLOT_CAPACITY", "12")))
    NOTIFICATION_TIMEOUT_SECONDS: int = Field(default_factory=lambda: int(os.getenv("NOTIFICATION_TIMEOUT_SECONDS", "4")))
    MAX_DOCUMENT_BYTES: int = Field(default_factory=lambda: int(os.getenv("MAX_DOCUMENT_BYTES", str(5 * 1024 * 1024))))

    # Seed do primeiro administrador
    ADMIN_NAME: str = Field(default_factory=lambda: os.getenv("ADMIN_NAME", "Administrador"))
    ADMIN_EMAIL: str = Field(default_factory=lambda: os.getenv("ADMIN_EMAIL", "admin@academia.go.gov.br"))
    ADMIN_PASSWORD: str = Field(default_factory=lambda: os.getenv("ADMIN_PASSWORD", "admin12345"))
    RUN_MIGRATIONS_ON_STARTUP: bool = Field(default_factory=lambda: os.getenv("RUN_MIGRATIONS_ON_STARTUP", "1") not in {"0", "false", "False"})

settings = Settings()
