"""
Print the display order of a category: its slides and the items under each.

Usage:
    ./manage.py show_gallery 3
    ./manage.py show_gallery 3 --urls
"""

from django.core.management.base import BaseCommand, CommandError

from gallery.operations import load_gallery
from gallery.service.api_client import ApiError, PortfolioApiClient
from gallery.service.config import get_api_origin
from gallery.service.embed import get_video_provider, resolve_url, to_embed_url


class Command(BaseCommand):
    help = 'Show the slide order and grouped items of a category'

    def add_arguments(self, parser):
        parser.add_argument('category_id', type=int, help='Category to inspect')
        parser.add_argument(
            '--urls',
            action='store_true',
            help='Also print the resolved (and embeddable) URL of every item',
        )

    def describe(self, item, show_urls):
        line = f'[{item.kind}] #{item.id} pos={item.sort_position}'
        if item.description:
            line += f' "{item.description}"'
        if show_urls:
            url = resolve_url(item.url, get_api_origin())
            if item.is_video and get_video_provider(url):
                url = to_embed_url(url)
            line += f' {url}'
        return line

    def handle(self, *args, **options):
        category_id = options['category_id']
        show_urls = options['urls']

        try:
            detail, gallery = load_gallery(PortfolioApiClient(), category_id)
        except ApiError as e:
            raise CommandError(f'Could not load category {category_id}: {e}')

        self.stdout.write(f"Category: {detail.get('name', category_id)}")
        if not any(m.is_slide for m in gallery.items) and gallery.items:
            self.stdout.write(self.style.WARNING('No slide is flagged; every item is shown as a slide'))

        if not gallery.slides:
            self.stdout.write('No media.')
            return

        for index, slide in enumerate(gallery.slides, start=1):
            key = f' key={slide.group_key}' if slide.group_key else ''
            self.stdout.write(f'{index}. {self.describe(slide, show_urls)}{key}')
            for item in gallery.items_for(slide):
                self.stdout.write(f'     - {self.describe(item, show_urls)}')

        shown = {(m.kind, m.id) for m in gallery.slides}
        for slide in gallery.slides:
            shown.update((m.kind, m.id) for m in gallery.items_for(slide))
        orphans = [m for m in gallery.items if (m.kind, m.id) not in shown]
        if orphans:
            self.stdout.write(self.style.WARNING(f'{len(orphans)} item(s) not shown under any slide:'))
            for item in orphans:
                self.stdout.write(f'  - {self.describe(item, show_urls)}')
