"""Configuration settings for the Controller server."""

import os


DATABASE_PATH = os.environ.get("INSTRUCTSCAN_DATABASE_PATH", "/app/data/metadata.db")

STORAGE_PATH = os.environ.get("INSTRUCTSCAN_STORAGE_PATH", "/app/data/py-files")

CONTROLLER_HOST = os.environ.get("INSTRUCTSCAN_HOST", "0.0.0.0")

CONTROLLER_PORT = int(os.environ.get("INSTRUCTSCAN_PORT", "8000"))

JWT_SECRET = os.environ.get("INSTRUCTSCAN_JWT_SECRET", "")

JWT_ALGORITHM = os.environ.get("INSTRUCTSCAN_JWT_ALGORITHM", "HS256")
