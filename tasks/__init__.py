"""Celery tasks: nightly playback ingestion and daily campaign reports."""
