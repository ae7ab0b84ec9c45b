"""
Contact page content shaping.

The contact page is a list of positioned blocks (text, image, video). The
admin edits images and the other blocks as two sections, but the API stores
one list, so every edit renumbers positions across images followed by others.
"""

from typing import List, Tuple

from gallery.service.constants import BLOCK_IMAGE, BLOCK_TEXT
from gallery.service.embed import is_absolute_url, resolve_url

SECTION_IMAGES = 'images'
SECTION_OTHERS = 'others'


def normalize_blocks(blocks) -> List[dict]:
    """Copy blocks, giving any block without a position its list index."""
    normalized = []
    for idx, block in enumerate(blocks or []):
        block = dict(block)
        if block.get('position') is None:
            block['position'] = idx
        normalized.append(block)
    return normalized


def sort_blocks(blocks) -> List[dict]:
    """Stable sort by position."""
    return sorted(normalize_blocks(blocks), key=lambda b: b.get('position') or 0)


def split_blocks(blocks) -> Tuple[List[dict], List[dict]]:
    """
    Split sorted blocks into the image strip and the remaining blocks.

    Returns:
        (image_blocks, other_blocks), both in position order
    """
    ordered = sort_blocks(blocks)
    images = [b for b in ordered if b.get('type') == BLOCK_IMAGE]
    others = [b for b in ordered if b.get('type') != BLOCK_IMAGE]
    return images, others


def _renumber(blocks):
    return [dict(b, position=i) for i, b in enumerate(blocks)]


def _rebuild(blocks, section, edit):
    images, others = split_blocks(blocks)
    if section == SECTION_IMAGES:
        images = edit(images)
    elif section == SECTION_OTHERS:
        others = edit(others)
    else:
        raise ValueError(f'Unknown section: {section}')
    return _renumber(images + others)


def move_block(blocks, section, index, direction) -> List[dict]:
    """
    Swap a block with its neighbour inside one section.

    Args:
        blocks: all contact blocks
        section: 'images' or 'others'
        index: index of the block within the section
        direction: -1 (up) or 1 (down)

    Returns:
        all blocks, renumbered; moves past either end leave the order as is
    """

    def edit(section_blocks):
        target = index + direction
        if 0 <= index < len(section_blocks) and 0 <= target < len(section_blocks):
            section_blocks[index], section_blocks[target] = (
                section_blocks[target],
                section_blocks[index],
            )
        return section_blocks

    return _rebuild(blocks, section, edit)


def remove_block(blocks, section, index) -> List[dict]:
    """Drop one block from a section and renumber."""

    def edit(section_blocks):
        if 0 <= index < len(section_blocks):
            del section_blocks[index]
        return section_blocks

    return _rebuild(blocks, section, edit)


def update_text_block(blocks, index, content) -> List[dict]:
    """Replace the content of a text block in the 'others' section."""

    def edit(section_blocks):
        if 0 <= index < len(section_blocks) and section_blocks[index].get('type') == BLOCK_TEXT:
            section_blocks[index] = dict(section_blocks[index], content=content)
        return section_blocks

    return _rebuild(blocks, SECTION_OTHERS, edit)


def append_block(blocks, block) -> List[dict]:
    """Add a block after every existing one."""
    ordered = sort_blocks(blocks)
    return ordered + [dict(block, position=len(ordered))]


def select_thumbnails(contact, api_origin) -> List[str]:
    """Absolute URLs of the image blocks, in order."""
    images, _ = split_blocks((contact or {}).get('blocks'))
    return [resolve_url(b.get('url') or '', api_origin) for b in images if b.get('url')]


def normalize_social_url(url) -> str:
    """
    Clean a social profile URL typed by the admin.

    Examples:
        '  linkedin.com/in/me ' -> 'https://linkedin.com/in/me'
        'http://x.com' -> 'http://x.com'
        '   ' -> ''  (empty means the link is removed)
    """
    cleaned = (url or '').strip()
    if not cleaned:
        return ''
    if is_absolute_url(cleaned):
        return cleaned
    return f'https://{cleaned}'
