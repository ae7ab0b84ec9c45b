"""Context processors for the gallery app."""

from django.conf import settings

from gallery.service.config import get_api_origin, get_cv_download_url, get_site_title


def portfolio_settings(request):
    """Make site-wide portfolio settings available to all templates."""
    return {
        'site_title': get_site_title(),
        'api_origin': get_api_origin(),
        'cv_download_url': get_cv_download_url(),
        'admin_path': settings.PORTFOLIO_ADMIN_PATH,
    }
