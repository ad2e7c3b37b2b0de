import os

from dotenv import load_dotenv


load_dotenv()

INSECURE_DEFAULT_SECRET = "change-me"


def _get_int(value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    return int(value)


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./school_dashboard.db")

CORS_ALLOW_ORIGINS = _get_list(os.getenv("CORS_ALLOW_ORIGINS"), ["http://localhost:3000"])

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", INSECURE_DEFAULT_SECRET)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = _get_int(os.getenv("JWT_EXPIRES_MINUTES"), 60 * 24)

BCRYPT_ROUNDS = _get_int(os.getenv("BCRYPT_ROUNDS"), 10)


def is_production(app_env: str | None = None) -> bool:
    return (app_env or APP_ENV).strip().lower() == "production"


def validate_runtime_config(app_env: str | None = None, secret: str | None = None) -> None:
    secret = JWT_SECRET_KEY if secret is None else secret
    if is_production(app_env) and secret == INSECURE_DEFAULT_SECRET:
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
