"""
High-level operations that can be used by views and management commands.

This module provides testable functions that combine the API client with the
ordering and contact shaping services, making it easy to test the site's
behaviour without going through Django views.
"""

import logging

from gallery.service.api_client import ApiError
from gallery.service.config import get_api_origin
from gallery.service.contact import normalize_blocks, normalize_social_url, select_thumbnails
from gallery.service.embed import resolve_url
from gallery.service.ordering import build_gallery, move_in_order

logger = logging.getLogger(__name__)

HOME_BACKGROUND_LIMIT = 5


def safe_public_categories(client):
    """Public categories for the navigation bar; empty when the API is down."""
    try:
        return client.public_categories()
    except ApiError as e:
        logger.warning('Could not load public categories: %s', e)
        return []


def safe_public_socials(client):
    """Public social links; empty when the API is down."""
    try:
        return client.public_socials() or {}
    except ApiError as e:
        logger.warning('Could not load social links: %s', e)
        return {}


def load_gallery(client, category_id):
    """
    Fetch a category and derive its display structures.

    Returns:
        (detail dict, Gallery)

    Raises:
        ApiError: If the category cannot be fetched
    """
    detail = client.category_detail(category_id)
    return detail, build_gallery(detail)


def load_category_details(client, categories):
    """Fetch the detail record of every category, in order."""
    return [client.category_detail(c['id']) for c in categories]


def collect_category_images(details, api_origin=None, limit=None):
    """
    Absolute URLs of every category image, category by category.

    Args:
        details: category detail records
        api_origin: origin to resolve relative paths against (default from settings)
        limit: optional maximum number of URLs
    """
    api_origin = api_origin if api_origin is not None else get_api_origin()
    urls = []
    for detail in details:
        for image in detail.get('images') or []:
            if image and image.get('image_url'):
                urls.append(resolve_url(image['image_url'], api_origin))
    return urls[:limit] if limit is not None else urls


def load_home(client):
    """
    Gather everything the landing page shows.

    Returns:
        dict with 'categories', 'backgrounds', 'first_category_id'

    Raises:
        ApiError: If the categories cannot be fetched
    """
    categories = client.public_categories()
    details = load_category_details(client, categories)
    return {
        'categories': categories,
        'backgrounds': collect_category_images(details, limit=HOME_BACKGROUND_LIMIT),
        'first_category_id': details[0]['id'] if details else None,
    }


def load_contact_thumbnails(client, contact):
    """
    Images for the contact page strip.

    Uses the contact page's own image blocks, falling back to every image of
    every public category.
    """
    api_origin = get_api_origin()
    chosen = select_thumbnails(contact, api_origin)
    if chosen:
        return chosen
    try:
        details = load_category_details(client, client.public_categories())
    except ApiError as e:
        logger.warning('Could not load fallback thumbnails: %s', e)
        return []
    return collect_category_images(details, api_origin)


def load_contact_for_edit(client):
    """Fetch the admin view of the contact page with defaults filled in."""
    data = client.get_contact()
    return {
        'title': data.get('title') or 'Contact',
        'intro': data.get('intro') or '',
        'body': data.get('body') or '',
        'hero_image_url': data.get('hero_image_url') or None,
        'footer_note': data.get('footer_note') or '',
        'blocks': normalize_blocks(data.get('blocks')),
    }


def edit_contact_blocks(client, edit):
    """
    Apply an edit to the contact blocks and store the result.

    Args:
        client: PortfolioApiClient with an admin token
        edit: callable(blocks) -> new blocks

    Returns:
        the saved list of blocks
    """
    contact = load_contact_for_edit(client)
    blocks = edit(contact['blocks'])
    client.save_contact_blocks(blocks)
    return blocks


def move_category(client, categories, category_id, direction):
    """
    Move a category one place up (-1) or down (1) and store the new order.

    Returns:
        the new list of ids; unchanged (and nothing sent) when the move is
        not possible
    """
    ids = [c['id'] for c in categories]
    if category_id not in ids:
        return ids
    new_order = move_in_order(ids, ids.index(category_id), direction)
    if new_order != ids:
        client.reorder_categories(new_order)
    return new_order


def bump_media_position(client, media_id, current_position, direction):
    """Shift a media record's position by one step."""
    position = (current_position or 0) + direction
    client.update_media_meta(media_id, position=position)
    return position


def assign_media_group(client, media_id, group_key):
    """Attach a media record to a slide's group, or detach it with an empty key."""
    client.update_media_meta(media_id, slide_key=group_key or '')


def save_social_link(client, platform, url):
    """
    Store or remove a social profile link.

    Returns:
        the cleaned URL; empty when the link was removed
    """
    cleaned = normalize_social_url(url)
    if cleaned:
        client.save_social(platform, cleaned)
    else:
        client.delete_social(platform)
    return cleaned
