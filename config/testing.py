import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "firedrill_test"),
}

ALLOWED_EMAIL_DOMAIN = "example.org"
AUTH_EMAIL_HEADER = "X-Forwarded-Email"
RESET_ADMIN_TIER = "admin"
CHANGE_POLL_SECONDS = 0

DEBUG = False
TESTING = True
DEV_LOGIN = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
