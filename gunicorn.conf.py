"""Gunicorn configuration for FastAPI/ASGI runtime."""

import os

# Application served when started as plain `gunicorn`.
wsgi_app = "tenant_admin.main:app"

# Ensure ASGI worker is used even when start command is `gunicorn tenant_admin.main:app`.
worker_class = "uvicorn.workers.UvicornWorker"

bind = f"0.0.0.0:{os.getenv('PORT', '8000')}"

# Conservative defaults for small instances.
workers = int(os.getenv("WEB_CONCURRENCY", "1"))
timeout = int(os.getenv("GUNICORN_TIMEOUT", "120"))
