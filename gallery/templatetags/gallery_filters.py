from django import template

from gallery.service.config import get_api_origin
from gallery.service.embed import (
    get_video_provider,
    resolve_url,
    to_autoplay_embed_url,
    to_embed_url,
)

register = template.Library()


@register.filter
def media_url(url):
    """
    Make a media path stored by the API absolute.

    Examples:
        "/uploads/a.png" -> "http://127.0.0.1:5000/uploads/a.png"
        "https://cdn.example.com/a.png" -> unchanged
    """
    return resolve_url(url or '', get_api_origin())


@register.filter
def embed_url(url):
    """
    Iframe URL for YouTube and Vimeo links.

    Examples:
        "https://youtu.be/abc123" -> "https://www.youtube.com/embed/abc123"
        "https://vimeo.com/42" -> "https://player.vimeo.com/video/42"
    """
    return to_embed_url(media_url(url))


@register.filter
def autoplay_embed_url(url):
    """Muted, looping, autoplaying iframe URL; direct files are returned as-is."""
    return to_autoplay_embed_url(media_url(url))


@register.filter
def video_provider(url):
    """'youtube', 'vimeo', or '' for a direct video file."""
    return get_video_provider(url or '') or ''
