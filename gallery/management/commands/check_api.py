"""
Django management command to check the portfolio API configuration.

Usage:
    ./manage.py check_api
"""

from django.conf import settings
from django.core.management.base import BaseCommand

from gallery.service.api_client import ApiError, PortfolioApiClient
from gallery.service.config import get_api_base_url


class Command(BaseCommand):
    help = 'Check the portfolio API configuration and whether the public endpoints answer'

    def handle(self, *args, **options):
        self.stdout.write('\n=== Portfolio API Configuration ===\n')

        self.stdout.write(f'PORTFOLIO_API_ORIGIN: {settings.PORTFOLIO_API_ORIGIN}')
        self.stdout.write(f'PORTFOLIO_API_TIMEOUT: {settings.PORTFOLIO_API_TIMEOUT}')
        self.stdout.write(f'PORTFOLIO_ADMIN_PATH: /{settings.PORTFOLIO_ADMIN_PATH}')
        self.stdout.write(f'API base URL: {get_api_base_url()}')

        self.stdout.write('\n=== Status ===\n')

        client = PortfolioApiClient()
        ok = True

        try:
            categories = client.public_categories()
        except ApiError as e:
            ok = False
            self.stdout.write(self.style.ERROR('Categories: Not reachable'))
            self.stdout.write(f'  Error: {e}')
        else:
            self.stdout.write(self.style.SUCCESS(f'Categories: {len(categories)} public'))

        try:
            socials = client.public_socials()
        except ApiError as e:
            ok = False
            self.stdout.write(self.style.ERROR('Socials: Not reachable'))
            self.stdout.write(f'  Error: {e}')
        else:
            linked = sorted(k for k, v in socials.items() if v and v.get('url'))
            self.stdout.write(self.style.SUCCESS(f"Socials: {', '.join(linked) or 'none set'}"))

        if client.has_cv():
            self.stdout.write(self.style.SUCCESS('CV: Available'))
        else:
            self.stdout.write(self.style.WARNING('CV: Not uploaded (or not reachable)'))

        if ok:
            self.stdout.write(self.style.SUCCESS('\nThe portfolio API is ready.'))
        else:
            self.stdout.write(self.style.ERROR('\nThe portfolio API is NOT reachable.'))

        self.stdout.write('')
