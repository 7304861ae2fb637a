import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./members.db")
DATABASE_NAME = os.getenv("DATABASE_NAME") or None
DATABASE_TIMEOUT_SECONDS = float(os.getenv("DATABASE_TIMEOUT_SECONDS", "5"))

SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me")
SESSION_STORE_SECRET = os.getenv("SESSION_STORE_SECRET", "change-me-too")
SESSION_STORE_BACKEND = os.getenv("SESSION_STORE_BACKEND", "database")
SESSION_SIGNING_ALGORITHM = os.getenv("SESSION_SIGNING_ALGORITHM", "HS256")
SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", "3600"))
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session")
SESSION_COOKIE_SECURE = _get_bool(os.getenv("SESSION_COOKIE_SECURE"), default=False)

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))


def validate_runtime_config() -> None:
    if APP_ENV.lower() != "production":
        return
    if SESSION_SECRET == "change-me":
        raise RuntimeError("SESSION_SECRET must be set in production.")
    if SESSION_STORE_SECRET == "change-me-too":
        raise RuntimeError("SESSION_STORE_SECRET must be set in production.")
