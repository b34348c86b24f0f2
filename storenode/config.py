"""Configuration settings for the store node server."""

import os

from common.constants import DEFAULT_STORE_PORT


DATABASE_PATH = os.environ.get("STORE_DATABASE_PATH", "/app/data/store.db")

STORE_HOST = os.environ.get("STORE_HOST", "0.0.0.0")

STORE_PORT = int(os.environ.get("STORE_PORT", str(DEFAULT_STORE_PORT)))

AUTH_REQUIRED = os.environ.get("STORE_AUTH_REQUIRED", "false").lower() in ("1", "true", "yes")

ADMIN_USERNAME = os.environ.get("STORE_ADMIN_USERNAME")

ADMIN_PASSWORD = os.environ.get("STORE_ADMIN_PASSWORD")

API_KEY_PREFIX = "wr_"
