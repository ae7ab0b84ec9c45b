"""
HTTP client for the portfolio API.

Every record shown by the site is owned by the API. The client wraps a
requests.Session pointed at <origin>/api; the admin bearer token is passed in
by the caller, never read from ambient state.
"""

import logging
from typing import List, Optional

import requests

from gallery.service.config import get_api_base_url, get_api_timeout

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the portfolio API cannot be reached or rejects a request"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(ApiError):
    """Raised when the API refuses the credentials or the token"""

    pass


def _error_message(response):
    """Pull a readable message out of an error response."""
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or response.reason
    if isinstance(data, dict):
        for key in ('error', 'message', 'detail', 'msg'):
            if data.get(key):
                return str(data[key])
    return str(data)


def _file_field(upload):
    """Turn a Django UploadedFile (or any file object) into a requests files tuple."""
    name = getattr(upload, 'name', None) or 'upload'
    content_type = getattr(upload, 'content_type', None) or 'application/octet-stream'
    return (name, upload, content_type)


class PortfolioApiClient:
    """
    Thin wrapper around the portfolio REST API.

    Args:
        base_url: API base URL (default from settings, '<origin>/api')
        token: Optional bearer token for admin endpoints
        timeout: Request timeout in seconds (default from settings)
        session: Optional requests.Session to reuse
    """

    def __init__(self, base_url=None, token=None, timeout=None, session=None):
        self.base_url = (base_url or get_api_base_url()).rstrip('/')
        self.token = token
        self.timeout = timeout if timeout is not None else get_api_timeout()
        self.session = session or requests.Session()

    @property
    def cv_download_url(self):
        return f'{self.base_url}/cv/download'

    def _headers(self):
        if self.token:
            return {'Authorization': f'Bearer {self.token}'}
        return {}

    def request(self, method, path, **kwargs):
        """
        Send a request and decode the JSON body.

        Returns:
            Decoded JSON, or None for empty responses

        Raises:
            AuthenticationError: on 401/403
            ApiError: on transport failures and any other non-2xx status
        """
        url = f'{self.base_url}{path}'
        logger.debug('%s %s', method, url)
        try:
            response = self.session.request(
                method, url, headers=self._headers(), timeout=self.timeout, **kwargs
            )
        except requests.RequestException as e:
            logger.warning('API request %s %s failed: %s', method, url, e)
            raise ApiError(f'Portfolio API not reachable: {e}') from e

        if response.status_code in (401, 403):
            logger.warning('API refused %s %s (%s)', method, url, response.status_code)
            raise AuthenticationError(_error_message(response), response.status_code)

        if not response.ok:
            message = _error_message(response)
            logger.warning('API error %s %s (%s): %s', method, url, response.status_code, message)
            raise ApiError(message, response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    # Auth

    def login(self, email, password) -> str:
        """
        Exchange credentials for a bearer token.

        Raises:
            AuthenticationError: when the API answers without a token
        """
        data = self.request('POST', '/auth/login', json={'email': email, 'password': password})
        data = data or {}
        token = data.get('token') or data.get('access_token')
        if not token:
            raise AuthenticationError('Invalid credentials')
        return token

    # Categories

    def list_categories(self) -> List[dict]:
        return self.request('GET', '/categories') or []

    def public_categories(self) -> List[dict]:
        return self.request('GET', '/categories/public') or []

    def category_detail(self, category_id) -> dict:
        return self.request('GET', f'/categories/{category_id}/detail') or {}

    def create_category(self, name, description=''):
        return self.request('POST', '/categories', json={'name': name, 'description': description})

    def delete_category(self, category_id):
        return self.request('DELETE', f'/categories/{category_id}')

    def reorder_categories(self, ordered_ids):
        return self.request('PUT', '/categories/reorder', json={'ordered_ids': list(ordered_ids)})

    # Category media

    def upload_media(
        self, category_id, upload, kind, is_slide, slide_key=None, description=None
    ):
        """
        Upload an image or video to a category.

        Args:
            category_id: Target category
            upload: File object (Django UploadedFile)
            kind: 'image' or 'video'
            is_slide: True for a carousel slide, False for a grouped item
            slide_key: Grouping key of the slide an item belongs to
            description: Optional caption
        """
        data = {'type': kind, 'is_carousel': 'true' if is_slide else 'false'}
        if slide_key:
            data['slide_key'] = slide_key
        if description:
            data['description'] = description
        return self.request(
            'POST',
            f'/categories/{category_id}/media',
            data=data,
            files={'file': _file_field(upload)},
        )

    def delete_media(self, media_id):
        return self.request('DELETE', f'/categories/media/{media_id}')

    def update_media_meta(self, media_id, **fields):
        """Patch description, slide_key and/or position of a media record."""
        return self.request('PATCH', f'/categories/media/{media_id}/meta', json=fields)

    # Contact page

    def get_contact(self) -> dict:
        return self.request('GET', '/contact') or {}

    def public_contact(self) -> dict:
        return self.request('GET', '/contact/public') or {}

    def save_contact(self, **fields):
        return self.request('POST', '/contact', json=fields)

    def save_contact_blocks(self, blocks):
        return self.request('PUT', '/contact/blocks', json={'blocks': list(blocks)})

    def upload_contact_image(self, upload) -> str:
        """Upload an image for the contact page and return its URL."""
        data = self.request('POST', '/contact/upload-image', files={'file': _file_field(upload)})
        return (data or {}).get('url', '')

    def upload_contact_video(self, upload) -> str:
        """Upload a video for the contact page and return its URL."""
        data = self.request('POST', '/contact/upload-video', files={'file': _file_field(upload)})
        return (data or {}).get('url', '')

    # Socials

    def public_socials(self) -> dict:
        return self.request('GET', '/socials/public') or {}

    def save_social(self, platform, url):
        return self.request('POST', '/socials', json={'platform': platform, 'url': url})

    def delete_social(self, platform):
        return self.request('DELETE', f'/socials/{platform}')

    # CV

    def has_cv(self) -> bool:
        """Check whether a CV is available for download."""
        try:
            response = self.session.get(self.cv_download_url, timeout=self.timeout, stream=True)
        except requests.RequestException as e:
            logger.warning('CV check failed: %s', e)
            return False
        response.close()
        return response.ok

    def upload_cv(self, upload):
        return self.request('POST', '/cv/', files={'file': _file_field(upload)})

    def delete_cv(self):
        return self.request('DELETE', '/cv/')

    # Messages

    def send_message(self, name, last_name, email, content):
        return self.request(
            'POST',
            '/messages',
            json={'name': name, 'last_name': last_name, 'email': email, 'content': content},
        )
