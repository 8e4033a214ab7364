import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = dict(Config.DB_CONFIG)

ALLOWED_EMAIL_DOMAIN = Config.ALLOWED_EMAIL_DOMAIN
AUTH_EMAIL_HEADER = Config.AUTH_EMAIL_HEADER
RESET_ADMIN_TIER = Config.RESET_ADMIN_TIER
BOOTSTRAP_ADMINS = Config.BOOTSTRAP_ADMINS
CHANGE_POLL_SECONDS = Config.CHANGE_POLL_SECONDS
PORTAL_NAME = Config.PORTAL_NAME

# Session cookie is shared across sibling subdomains of this host.
SITE_HOST = Config.SITE_HOST

DEBUG = False
DEV_LOGIN = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
