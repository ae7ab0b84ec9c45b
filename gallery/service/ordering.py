"""
Media ordering and grouping.

Turns the raw image/video records of a category into the display order used
by the gallery and the admin panel: one ordered sequence, the carousel slides,
and the items grouped beneath each slide.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from gallery.service.constants import KIND_IMAGE, KIND_VIDEO, URL_FIELDS


@dataclass
class MediaItem:
    """A single image or video of a category."""

    id: int
    kind: str  # 'image' or 'video'
    url: str = ''
    description: Optional[str] = None
    position: Optional[int] = None
    is_slide: bool = False
    group_key: Optional[str] = None

    @property
    def sort_position(self) -> int:
        """Position used for ordering; a missing position counts as 0."""
        return self.position if self.position is not None else 0

    @property
    def is_image(self) -> bool:
        return self.kind == KIND_IMAGE

    @property
    def is_video(self) -> bool:
        return self.kind == KIND_VIDEO

    @classmethod
    def from_record(cls, record, kind):
        """
        Build a MediaItem from an API record.

        Args:
            record: dict with id, image_url/video_url, description, position,
                is_carousel and slide_key fields, or an existing MediaItem
            kind: 'image' or 'video'

        Returns:
            MediaItem tagged with the given kind
        """
        if isinstance(record, MediaItem):
            return record

        return cls(
            id=record['id'],
            kind=kind,
            url=record.get(URL_FIELDS[kind]) or '',
            description=record.get('description'),
            position=record.get('position'),
            is_slide=bool(record.get('is_carousel')),
            # An empty key is how the admin clears a grouping
            group_key=record.get('slide_key') or None,
        )


@dataclass
class MediaStats:
    """Counts shown in the admin panel."""

    slides: int = 0
    items: int = 0
    image_items: int = 0
    video_items: int = 0


@dataclass
class Gallery:
    """All structures derived from one fetch of a category."""

    items: List[MediaItem] = field(default_factory=list)
    slides: List[MediaItem] = field(default_factory=list)
    groups: Dict[str, List[MediaItem]] = field(default_factory=dict)

    def items_for(self, slide):
        return group_for_slide(self.groups, slide)


def build_ordered_media(images, videos) -> List[MediaItem]:
    """
    Tag images and videos and merge them into one ordered sequence.

    Items are sorted by position ascending, ties broken by id ascending.
    Nothing is dropped.

    Args:
        images: iterable of image records (dicts or MediaItems)
        videos: iterable of video records (dicts or MediaItems)

    Returns:
        list of MediaItem
    """
    items = [MediaItem.from_record(r, KIND_IMAGE) for r in images or []]
    items += [MediaItem.from_record(r, KIND_VIDEO) for r in videos or []]
    return sorted(items, key=lambda m: (m.sort_position, m.id))


def select_slides(ordered_items) -> List[MediaItem]:
    """
    Pick the carousel slides, keeping the input order.

    When no item is flagged as a slide the whole list is the slide sequence,
    so galleries with legacy records still show something.
    """
    slides = [m for m in ordered_items if m.is_slide]
    return slides if slides else list(ordered_items)


def group_by_key(ordered_items) -> Dict[str, List[MediaItem]]:
    """
    Bucket the non-slide items by their grouping key.

    Slides never join a group, and items without a key join none. Each bucket
    is sorted by position with a stable sort.

    Returns:
        dict mapping group key to ordered list of MediaItem
    """
    groups: Dict[str, List[MediaItem]] = {}
    for item in ordered_items:
        if item.is_slide:
            continue
        if not item.group_key:
            continue
        groups.setdefault(item.group_key, []).append(item)

    for key in groups:
        groups[key].sort(key=lambda m: m.sort_position)
    return groups


def group_for_slide(groups, slide) -> List[MediaItem]:
    """Items shown beneath a slide; empty when the slide has no key."""
    if slide is None or not slide.group_key:
        return []
    return groups.get(slide.group_key, [])


def default_group_key(slides) -> Optional[str]:
    """Key of the first slide that carries one."""
    for slide in slides:
        if slide.group_key:
            return slide.group_key
    return None


def media_stats(items, slides) -> MediaStats:
    """Count slides and grouped items for the admin summary."""
    non_slides = [m for m in items if not m.is_slide]
    return MediaStats(
        slides=len(slides),
        items=len(non_slides),
        image_items=sum(1 for m in non_slides if m.is_image),
        video_items=sum(1 for m in non_slides if m.is_video),
    )


def build_gallery(detail) -> Gallery:
    """
    Derive the ordered items, slides and groups of a category detail record.

    Args:
        detail: dict with optional 'images' and 'videos' lists

    Returns:
        Gallery
    """
    detail = detail or {}
    items = build_ordered_media(detail.get('images'), detail.get('videos'))
    return Gallery(items=items, slides=select_slides(items), groups=group_by_key(items))


def move_in_order(ids, index, direction):
    """
    Swap the id at index with its neighbour.

    Args:
        ids: ordered list of ids
        index: position of the id to move
        direction: -1 to move up, 1 to move down

    Returns:
        new list; an unchanged copy when the move falls off either end
    """
    order = list(ids)
    target = index + direction
    if index < 0 or index >= len(order) or target < 0 or target >= len(order):
        return order
    order[index], order[target] = order[target], order[index]
    return order
