"""
Django app configuration for the rail-rest library.

On start-up every installed app's ``api_resources`` module is imported so
that explicit registrations (``metadata_registry.register`` or the
``@api_resource`` decorator) run before the first request.
"""

import logging

from django.apps import AppConfig as BaseAppConfig
from django.utils.module_loading import autodiscover_modules

logger = logging.getLogger(__name__)

RESOURCE_MODULE_NAME = "api_resources"


class AppConfig(BaseAppConfig):
    """Django app configuration for rail-rest."""

    name = "rail_rest"
    verbose_name = "Rail REST"
    label = "rail_rest"

    def ready(self):
        self._discover_resource_modules()
        self._invalidate_cache_on_startup()

    def _discover_resource_modules(self):
        """Import ``<app>.api_resources`` for every installed app."""
        from .core.registry import metadata_registry

        before = len(metadata_registry.registered())
        autodiscover_modules(RESOURCE_MODULE_NAME)
        discovered = len(metadata_registry.registered()) - before
        logger.info("Discovered %s registered API resource(s)", discovered)

    def _invalidate_cache_on_startup(self):
        from .core.registry import metadata_registry

        metadata_registry.clear_cache()
