"""The ``access_token`` cookie shared by the proxy routes and the dashboard."""

from django.conf import settings


def read_access_token(request):
    """Return the bearer token stored in the cookie, or ``None``."""
    return request.COOKIES.get(settings.ACCESS_TOKEN_COOKIE) or None


def set_access_token(response, token):
    response.set_cookie(
        settings.ACCESS_TOKEN_COOKIE,
        token,
        max_age=settings.ACCESS_TOKEN_COOKIE_MAX_AGE,
        path='/',
        secure=settings.ACCESS_TOKEN_COOKIE_SECURE,
        httponly=True,
        samesite='Lax',
    )


def clear_access_token(response):
    response.delete_cookie(settings.ACCESS_TOKEN_COOKIE, path='/', samesite='Lax')
