"""
External media URL resolution.

Classifies media URLs (uploaded files, YouTube, Vimeo) and builds the absolute,
embeddable and autoplaying forms used by the templates. Every function here
is a plain string transform and never raises.
"""

import re
from typing import Optional
from urllib.parse import urlencode

from gallery.service.constants import (
    PROVIDER_VIMEO,
    PROVIDER_YOUTUBE,
    VIMEO_AUTOPLAY_PARAMS,
    VIMEO_EMBED_BASE,
    YOUTUBE_AUTOPLAY_PARAMS,
    YOUTUBE_EMBED_BASE,
)


ABSOLUTE_URL_PATTERN = re.compile(r'^https?://', re.IGNORECASE)

# Share and watch links
YOUTUBE_LINK_PATTERN = re.compile(r'youtu\.be/|youtube\.com/watch\?v=', re.IGNORECASE)
YOUTUBE_SHORT_ID_PATTERN = re.compile(r'youtu\.be/([^?]+)', re.IGNORECASE)
YOUTUBE_QUERY_ID_PATTERN = re.compile(r'v=([^&]+)', re.IGNORECASE)
VIMEO_ID_PATTERN = re.compile(r'vimeo\.com/(\d+)', re.IGNORECASE)

# Embed forms, anchored at the start of the URL
YOUTUBE_EMBED_PATTERN = re.compile(r'^https?://(?:www\.)?youtube\.com/embed/([^?&#]*)', re.IGNORECASE)
VIMEO_EMBED_PATTERN = re.compile(r'^https?://player\.vimeo\.com/video/', re.IGNORECASE)


def is_absolute_url(url) -> bool:
    """Check if a URL starts with http:// or https://"""
    return bool(url) and bool(ABSOLUTE_URL_PATTERN.match(url))


def resolve_url(raw_url, api_origin):
    """
    Make an API-relative media path absolute.

    Args:
        raw_url: URL as stored by the API, e.g. '/media/x.png'
        api_origin: origin of the API, e.g. 'https://api.example.com'

    Returns:
        str: absolute URLs and empty strings unchanged, otherwise
             api_origin + raw_url
    """
    if not raw_url:
        return raw_url
    if is_absolute_url(raw_url):
        return raw_url
    return f'{api_origin}{raw_url}'


def get_youtube_id(url) -> Optional[str]:
    """
    Extract a YouTube video id.

    Tries the youtu.be path form first, then the v= query parameter.
    """
    if not url:
        return None
    for pattern in (YOUTUBE_SHORT_ID_PATTERN, YOUTUBE_QUERY_ID_PATTERN):
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def get_vimeo_id(url) -> Optional[str]:
    """Extract the numeric Vimeo video id."""
    if not url:
        return None
    match = VIMEO_ID_PATTERN.search(url)
    return match.group(1) if match else None


def _is_embed_url(url):
    return bool(YOUTUBE_EMBED_PATTERN.match(url) or VIMEO_EMBED_PATTERN.match(url))


def get_video_provider(url) -> Optional[str]:
    """
    Determine which provider hosts a video URL.

    Returns:
        'youtube', 'vimeo', or None for direct media files
    """
    if not url:
        return None
    if YOUTUBE_LINK_PATTERN.search(url) or YOUTUBE_EMBED_PATTERN.match(url):
        return PROVIDER_YOUTUBE
    if VIMEO_ID_PATTERN.search(url) or VIMEO_EMBED_PATTERN.match(url):
        return PROVIDER_VIMEO
    return None


def to_embed_url(raw_url):
    """
    Convert a YouTube or Vimeo link to its iframe-loadable form.

    Examples:
        https://youtu.be/abc123 -> https://www.youtube.com/embed/abc123
        https://www.youtube.com/watch?v=abc123&t=5 -> https://www.youtube.com/embed/abc123
        https://vimeo.com/123456 -> https://player.vimeo.com/video/123456

    Anything else, including URLs already in embed form, is returned
    unchanged. A provider link without an extractable id is returned as-is.
    """
    if not raw_url or _is_embed_url(raw_url):
        return raw_url

    if YOUTUBE_LINK_PATTERN.search(raw_url):
        video_id = get_youtube_id(raw_url)
        return f'{YOUTUBE_EMBED_BASE}{video_id}' if video_id else raw_url

    video_id = get_vimeo_id(raw_url)
    if video_id:
        return f'{VIMEO_EMBED_BASE}{video_id}'

    return raw_url


def _append_query(url, params):
    separator = '&' if '?' in url else '?'
    return f'{url}{separator}{urlencode(params)}'


def to_autoplay_embed_url(raw_url):
    """
    Build a muted, looping, autoplaying embed URL.

    YouTube needs playlist=<id> to loop a single video. Non-provider URLs are
    returned unchanged; native <video> playback is configured by the caller.
    """
    base = to_embed_url(raw_url)
    if not base:
        return base

    youtube_match = YOUTUBE_EMBED_PATTERN.match(base)
    if youtube_match:
        video_id = youtube_match.group(1) or get_youtube_id(raw_url) or ''
        params = [(k, video_id if v is None else v) for k, v in YOUTUBE_AUTOPLAY_PARAMS]
        return _append_query(base, params)

    if VIMEO_EMBED_PATTERN.match(base):
        return _append_query(base, VIMEO_AUTOPLAY_PARAMS)

    return base
