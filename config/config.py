import os


def _admins_from_env() -> list[str]:
    raw = os.environ.get("FIREDRILL_ADMINS", "")
    return [e.strip().lower() for e in raw.split(",") if e.strip()]


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "firedrill_db")

    # Identity and access
    ALLOWED_EMAIL_DOMAIN = os.environ.get("ALLOWED_EMAIL_DOMAIN", "example.org")
    AUTH_EMAIL_HEADER = os.environ.get("AUTH_EMAIL_HEADER", "X-Forwarded-Email")
    RESET_ADMIN_TIER = os.environ.get("RESET_ADMIN_TIER", "admin")
    BOOTSTRAP_ADMINS = _admins_from_env()

    # Live updates
    CHANGE_POLL_SECONDS = float(os.environ.get("CHANGE_POLL_SECONDS", "3"))

    PORTAL_NAME = os.environ.get("PORTAL_NAME", "firedrill")
    SITE_HOST = os.environ.get("SITE_HOST", "")

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))

    DB_CONFIG = {
        "host": DB_HOST,
        "port": DB_PORT,
        "user": DB_USER,
        "password": DB_PASSWORD,
        "database": DB_NAME,
    }
