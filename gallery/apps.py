import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class GalleryConfig(AppConfig):
    name = 'gallery'
    verbose_name = 'Portfolio gallery'

    def ready(self):
        """Log which API the site talks to"""
        from gallery.service.config import get_api_origin

        logger.info('Portfolio API origin: %s', get_api_origin())
