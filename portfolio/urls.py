"""
URL configuration for the portfolio site.

Public pages sit at the root; the admin panel lives under
PORTFOLIO_ADMIN_PATH so it is not guessable from the public navigation.
"""

from django.conf import settings
from django.urls import path

from gallery.views import (
    admin_contact_view,
    admin_panel_view,
    category_create_view,
    category_delete_view,
    category_move_view,
    category_view,
    contact_blocks_view,
    contact_view,
    cv_delete_view,
    cv_upload_view,
    home_view,
    media_delete_view,
    media_meta_view,
    media_upload_view,
    signin_view,
    signout_view,
    socials_view,
)

ADMIN = settings.PORTFOLIO_ADMIN_PATH

urlpatterns = [
    # Public pages
    path('', home_view, name='home'),
    path('category/<int:category_id>/', category_view, name='category'),
    path('contact/', contact_view, name='contact'),
    # Admin session
    path(f'{ADMIN}signin/', signin_view, name='signin'),
    path(f'{ADMIN}signout/', signout_view, name='signout'),
    # Admin panel
    path(ADMIN, admin_panel_view, name='admin_panel'),
    path(f'{ADMIN}categories/create/', category_create_view, name='category_create'),
    path(
        f'{ADMIN}categories/<int:category_id>/delete/',
        category_delete_view,
        name='category_delete',
    ),
    path(
        f'{ADMIN}categories/<int:category_id>/move/',
        category_move_view,
        name='category_move',
    ),
    path(
        f'{ADMIN}categories/<int:category_id>/media/',
        media_upload_view,
        name='media_upload',
    ),
    path(f'{ADMIN}media/<int:media_id>/delete/', media_delete_view, name='media_delete'),
    path(f'{ADMIN}media/<int:media_id>/meta/', media_meta_view, name='media_meta'),
    path(f'{ADMIN}socials/', socials_view, name='socials'),
    path(f'{ADMIN}cv/', cv_upload_view, name='cv_upload'),
    path(f'{ADMIN}cv/delete/', cv_delete_view, name='cv_delete'),
    path(f'{ADMIN}contact/', admin_contact_view, name='admin_contact'),
    path(f'{ADMIN}contact/blocks/', contact_blocks_view, name='contact_blocks'),
]
