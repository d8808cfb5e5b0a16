"""Redirects between the login page and the dashboard based on the token cookie."""

from urllib.parse import urlencode

from django.shortcuts import redirect

from .cookies import read_access_token


class DashboardAuthMiddleware:
    """``/dashboard*`` needs the cookie; ``/login`` with the cookie goes to the dashboard.

    Only presence is checked here; an expired token surfaces as a 401 from
    the API on the first proxied call.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path
        token = read_access_token(request)

        guarded = path == '/dashboard' or path.startswith('/dashboard/')
        if guarded and not token:
            return redirect(f"/login?{urlencode({'next': path})}")

        if path.rstrip('/') == '/login' and token:
            return redirect('/dashboard')

        return self.get_response(request)
