import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./bpo_financeiro.db")
DB_ECHO = _env_bool("DB_ECHO", "false")

# Sessões (JWT)
SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

# Esquema legado de senha
LEGACY_SALT = "bpo_salt"
BCRYPT_ROUNDS = 10

# Identidades gerenciadas
DERIVED_EMAIL_DOMAIN = os.getenv("DERIVED_EMAIL_DOMAIN", "bpo.local")
MANAGED_AUTH_SIGNUP_ENABLED = _env_bool("MANAGED_AUTH_SIGNUP_ENABLED", "true")

MIN_PASSWORD_LENGTH = 6
MAX_INSTALLMENTS = 36
MAX_CHART_RANGE_DAYS = int(os.getenv("MAX_CHART_RANGE_DAYS", "1830"))

LOCAL_TIMEZONE = os.getenv("LOCAL_TIMEZONE", "America/Sao_Paulo")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]

SUPPORT_EMAIL = os.getenv("SUPPORT_EMAIL", "suporte@bpofinanceiro.com.br")
SUPPORT_WHATSAPP = os.getenv("SUPPORT_WHATSAPP", "(15) 99664-9167")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
