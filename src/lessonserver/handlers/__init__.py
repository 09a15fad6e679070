"""
=============================================================================
REQUEST HANDLERS
=============================================================================

    CoursePageHandler   /course/<module>/<lesson>   HTML lesson pages
    StaticFileHandler   /css/*, /js/*               files from the assets root
    HomePage            /                           landing page
    HealthHandler       /health                     JSON status
    register_user_routes /api/users[/<id>]          sample JSON API

=============================================================================
"""

from .api import SAMPLE_USERS, list_users, register_user_routes, user_handler
from .health import HealthHandler
from .layout import render_page
from .pages import CoursePageHandler, HomePage
from .static import StaticFileHandler

__all__ = [
    "CoursePageHandler",
    "HomePage",
    "StaticFileHandler",
    "HealthHandler",
    "SAMPLE_USERS",
    "list_users",
    "user_handler",
    "register_user_routes",
    "render_page",
]
