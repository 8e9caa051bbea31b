import os
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool
from sqlmodel import SQLModel

from bpo_financeiro.models.auth_user import AuthUser  # noqa: F401  modelos no metadata
from bpo_financeiro.models.pattern import Pattern  # noqa: F401
from bpo_financeiro.models.profile import Profile  # noqa: F401
from bpo_financeiro.models.transaction import Transaction  # noqa: F401

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")

# Configuração Alembic
config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Injeta DATABASE_URL dinamicamente na config
if DATABASE_URL:
    config.set_main_option("sqlalchemy.url", DATABASE_URL)
elif not config.get_main_option("sqlalchemy.url"):
    raise Exception("DATABASE_URL não está definida. Verifique seu .env")

target_metadata = SQLModel.metadata

def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
