"""View decorators for the admin panel."""

from functools import wraps
from urllib.parse import urlencode

from django.contrib import messages
from django.shortcuts import redirect
from django.urls import reverse

from gallery.service.api_client import AuthenticationError

SESSION_TOKEN_KEY = 'api_token'


def get_session_token(request):
    """The API token stored at sign-in, or None"""
    return request.session.get(SESSION_TOKEN_KEY)


def api_token_required(view_func):
    """
    Require an API token in the session.

    Anonymous visitors are sent to the sign-in page. If the API rejects the
    token while the view runs, the token is dropped and the visitor is sent
    back to sign in.
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        signin_url = reverse('signin')
        if not get_session_token(request):
            return redirect(f'{signin_url}?{urlencode({"next": request.get_full_path()})}')
        try:
            return view_func(request, *args, **kwargs)
        except AuthenticationError:
            request.session.pop(SESSION_TOKEN_KEY, None)
            messages.error(request, 'Your session has expired. Please sign in again.')
            return redirect(signin_url)

    return wrapper
