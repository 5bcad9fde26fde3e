# fintrack/core/routing.py
"""
Navigation policy shared by the server-side guard middleware and the
client-side navigator. Kept free of settings/database imports so the client
package can use it without a server configuration.
"""

API_PREFIX = "/api"
SIGN_IN_PATH = "/signin"
SIGN_UP_PATH = "/signup"

PUBLIC_ROUTES = frozenset({SIGN_IN_PATH, SIGN_UP_PATH})


def is_api_path(path: str) -> bool:
    return path == API_PREFIX or path.startswith(API_PREFIX + "/")


def is_guard_exempt(path: str) -> bool:
    """True when a navigation to `path` must not trigger a session lookup."""
    return is_api_path(path) or path in PUBLIC_ROUTES
