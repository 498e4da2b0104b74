# migrations/env.py
from alembic import context
from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool

# (1) carregar .env antes de ler as configurações
load_dotenv()

from app.core.config import settings  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import _normalize  # noqa: E402

config = context.config

# (2) Alembic usa a mesma URL da aplicação
db_url = _normalize(settings.DATABASE_URL)
config.set_main_option("sqlalchemy.url", db_url)

target_metadata = Base.metadata
_batch = db_url.startswith("sqlite")

def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(url=url, target_metadata=target_metadata, literal_binds=True, render_as_batch=_batch)
    with context.begin_transaction():
        context.run_migrations()

def _run_with(connection):
    context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=_batch)
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connection = config.attributes.get("connection")
    if connection is not None:
        _run_with(connection)
        return
    connectable = engine_from_config(config.get_section(config.config_ini_section), prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _run_with(connection)

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
