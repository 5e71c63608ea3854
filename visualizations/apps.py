"""App configuration for the visualizations Django app."""

from __future__ import annotations

from django.apps import AppConfig


class VisualizationsConfig(AppConfig):
    """Configuration for the `visualizations` app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "visualizations"
