"""Proxy routes mounted under ``/web/``.

The browser only holds the httpOnly ``access_token`` cookie; these views turn
it into an ``Authorization: Bearer`` header and relay the API's answer
unchanged (status, body, Content-Type, Content-Disposition).
"""

import json
import logging

import requests
from django.http import HttpResponse, JsonResponse, StreamingHttpResponse
from django.views.decorators.http import require_http_methods, require_POST

from .client import BackendClient
from .cookies import clear_access_token, read_access_token, set_access_token

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
PROXY_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']


def _unauthorized():
    return JsonResponse({'message': 'Unauthorized'}, status=401)


def _server_error():
    return JsonResponse({'message': 'Internal server error'}, status=500)


def _iter_upstream(upstream):
    try:
        yield from upstream.iter_content(chunk_size=CHUNK_SIZE)
    finally:
        upstream.close()


def _relay(upstream):
    content_type = upstream.headers.get('Content-Type', 'application/octet-stream')
    if content_type.startswith('application/json'):
        try:
            response = HttpResponse(upstream.content, status=upstream.status_code, content_type=content_type)
        finally:
            upstream.close()
    else:
        # Closing the response (including on client disconnect) closes the upstream connection.
        response = StreamingHttpResponse(
            _iter_upstream(upstream),
            status=upstream.status_code,
            content_type=content_type,
        )
    disposition = upstream.headers.get('Content-Disposition')
    if disposition:
        response['Content-Disposition'] = disposition
    return response


def _forward(request, token, path):
    client = BackendClient(token)
    options = {'params': list(request.GET.lists()), 'stream': True}
    if request.content_type == 'multipart/form-data':
        # The CSRF check already parsed the stream; send the parsed form again.
        options['data'] = list(request.POST.lists())
        options['files'] = [
            (name, (upload.name, upload, upload.content_type))
            for name, upload in request.FILES.items()
        ]
    elif request.body:
        options['data'] = request.body
        options['headers'] = {'Content-Type': request.META.get('CONTENT_TYPE', 'application/json')}

    try:
        upstream = client.request(request.method, path, **options)
    except requests.RequestException:
        logger.exception('Proxy %s %s failed', request.method, path)
        return _server_error()
    return _relay(upstream)


@require_http_methods(PROXY_METHODS)
def proxy(request, path):
    token = read_access_token(request)
    if not token:
        return _unauthorized()
    return _forward(request, token, path)


@require_http_methods(['GET', 'DELETE'])
def invoice_document(request, invoice_id, document_id):
    """``GET`` downloads the document, ``DELETE`` removes it."""
    token = read_access_token(request)
    if not token:
        return _unauthorized()
    path = f'invoices/{invoice_id}/documents/{document_id}'
    if request.method == 'GET':
        path += '/download'
    return _forward(request, token, path)


@require_POST
def login(request):
    """Exchange credentials with the API and store the token in the cookie."""
    try:
        payload = json.loads(request.body or b'{}')
    except ValueError:
        return JsonResponse({'message': 'Invalid request'}, status=400)
    if not isinstance(payload, dict):
        return JsonResponse({'message': 'Invalid request'}, status=400)

    email = payload.get('email')
    password = payload.get('password')
    if not email or not password:
        return JsonResponse({'message': 'Email and password are required'}, status=400)

    try:
        upstream = BackendClient().request('POST', 'auth/login', json={'email': email, 'password': password})
    except requests.RequestException:
        logger.exception('Login request to the API failed')
        return _server_error()

    try:
        data = upstream.json()
    except ValueError:
        data = {}
    finally:
        upstream.close()
    if not isinstance(data, dict):
        data = {}

    if not upstream.ok:
        return JsonResponse({'message': data.get('message') or 'Login failed'}, status=upstream.status_code)

    access_token = data.get('accessToken')
    if not access_token:
        logger.error('API login succeeded without returning an access token')
        return JsonResponse({'message': 'No accessToken returned from API'}, status=502)

    response = JsonResponse({'ok': True})
    set_access_token(response, access_token)
    return response


@require_POST
def logout(request):
    response = JsonResponse({'ok': True})
    clear_access_token(response)
    return response
