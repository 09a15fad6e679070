"""
=============================================================================
SAMPLE JSON API
=============================================================================

A fixed, read-only user list that demonstrates JSON routes alongside the
HTML pages:

    GET /api/users     →  {"success": true, "count": 3, "users": [...]}
    GET /api/users/2   →  {"success": true, "user": {...}}

The route table matches paths exactly, so each user gets its own route
(see register_user_routes). Unknown ids fall through to the router's 404.

=============================================================================
"""

import json
from typing import Any, Callable, Dict, List

from ..http.router import Router


SAMPLE_USERS: List[Dict[str, Any]] = [
    {"id": "1", "name": "John Doe", "email": "john@example.com", "age": 30},
    {"id": "2", "name": "Jane Smith", "email": "jane@example.com", "age": 25},
    {"id": "3", "name": "Bob Johnson", "email": "bob@example.com", "age": 35},
]

JSON = "application/json"


def list_users(body: str, headers: Dict[str, str]) -> str:
    return json.dumps({"success": True, "count": len(SAMPLE_USERS), "users": SAMPLE_USERS})


def user_handler(user: Dict[str, Any]) -> Callable[[str, Dict[str, str]], str]:
    """Route handler returning one fixed user."""
    def handler(body: str, headers: Dict[str, str]) -> str:
        return json.dumps({"success": True, "user": user})
    return handler


def register_user_routes(router: Router, prefix: str = "/api/users") -> None:
    router.add_route("GET", prefix, list_users, JSON)
    for user in SAMPLE_USERS:
        router.add_route("GET", f"{prefix}/{user['id']}", user_handler(user), JSON)
