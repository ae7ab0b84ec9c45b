"""
Service layer for the portfolio site.

This module contains the data shaping and API access used by the site,
independent of Django views and templates. These functions are used by:
- The public and admin views (gallery/views.py)
- The management commands (gallery/management/commands/)
"""
