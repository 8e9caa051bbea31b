from sqlmodel import SQLModel, Session, create_engine

from bpo_financeiro.core.config import DATABASE_URL, DB_ECHO
from bpo_financeiro.models import triggers  # noqa: F401  registra os gatilhos

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=DB_ECHO, connect_args=connect_args)


def create_db_and_tables():
    from bpo_financeiro.models.auth_user import AuthUser  # noqa: F401  importar os modelos
    from bpo_financeiro.models.pattern import Pattern  # noqa: F401
    from bpo_financeiro.models.profile import Profile  # noqa: F401
    from bpo_financeiro.models.transaction import Transaction  # noqa: F401
    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session
