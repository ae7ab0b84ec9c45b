"""
Configuration adapter for the portfolio API.

Centralizes access to Django settings, ensuring consistent configuration
across views, templates and management commands.
"""

from django.conf import settings


def get_api_origin():
    """
    Get the origin of the portfolio API, without a trailing slash.

    Returns:
        str: e.g. 'http://127.0.0.1:5000'
    """
    return (settings.PORTFOLIO_API_ORIGIN or '').rstrip('/')


def get_api_base_url():
    """Get the base URL every API endpoint hangs off"""
    return f'{get_api_origin()}/api'


def get_api_timeout():
    """Get the request timeout in seconds"""
    return settings.PORTFOLIO_API_TIMEOUT


def get_cv_download_url():
    """Get the public URL of the downloadable CV"""
    return f'{get_api_base_url()}/cv/download'


def get_site_title():
    """Get the title shown in the navigation bar"""
    return settings.PORTFOLIO_SITE_TITLE
