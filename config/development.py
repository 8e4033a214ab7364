import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = dict(Config.DB_CONFIG)

ALLOWED_EMAIL_DOMAIN = Config.ALLOWED_EMAIL_DOMAIN
AUTH_EMAIL_HEADER = Config.AUTH_EMAIL_HEADER
RESET_ADMIN_TIER = Config.RESET_ADMIN_TIER
BOOTSTRAP_ADMINS = Config.BOOTSTRAP_ADMINS
CHANGE_POLL_SECONDS = Config.CHANGE_POLL_SECONDS
PORTAL_NAME = Config.PORTAL_NAME

DEBUG = True

# Accept the email from the login form when no sign-in proxy is in front.
DEV_LOGIN = bool(int(os.getenv("DEV_LOGIN", "1")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
