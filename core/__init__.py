"""Canal Mercado project package.

The Celery app is loaded together with Django so the ingestion and
report tasks bind to the configured broker instead of the AMQP default.
"""

from .celery import app as celery_app  # noqa: F401

__all__ = ("celery_app",)
