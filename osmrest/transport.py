import logging
from urllib.parse import urlencode

import requests

from osmrest.parsing import xml_to_object, dom_to_object, object_to_xml

log = logging.getLogger('osmrest.http')

USER_AGENT = 'osmrest/0.1'


def encode_body(body):
    """Turn a request body into what goes over the wire."""
    if body is None or isinstance(body, bytes):
        return body
    elif isinstance(body, str):
        return body.encode('utf-8')
    else:
        return object_to_xml(body)

def request_headers(request, extra=None):
    headers = {
        'User-Agent': USER_AGENT
    }
    if request.body is not None:
        headers['Content-Type'] = 'text/xml; charset=utf-8'
    if extra:
        headers.update(extra)
    if request.headers:
        headers.update(request.headers)
    return headers


class BasicAuthTransport(object):
    """Sends requests straight to the API with a Basic-Auth header.

    ``authorization`` is called for every request so credential changes on
    the Api take effect immediately.
    """

    def __init__(self, url, authorization, session=None):
        self.url = url
        self.authorization = authorization
        self.session = session or requests.Session()

    def send(self, request):
        log.debug("%s %s%s << payload %s", request.method, self.url, request.path, request.body is not None)

        fct = getattr(self.session, request.method.lower())
        headers = request_headers(request, {'Authorization': self.authorization()})
        response = fct(
            self.url + request.path,
            params=request.params,
            data=encode_body(request.body),
            headers=headers,
        )
        response.raise_for_status()

        return xml_to_object(response.content)


class OAuthTransport(object):
    """Sends requests through an externally built OAuth handle.

    The handle signs and sends the request itself; all it needs is
    ``handle.request(method, path, data=None, headers=None)`` where ``path``
    starts at the server root (``/api/0.6/...``).
    """

    def __init__(self, handle, root='/api'):
        self.handle = handle
        self.root = root

    def send(self, request):
        path = self.root + request.path
        params = dict((k, v) for (k, v) in (request.params or {}).items() if v is not None)
        if params:
            path += ('&' if '?' in path else '?') + urlencode(params)

        log.debug("%s %s via oauth << payload %s", request.method, path, request.body is not None)

        response = self.handle.request(
            request.method,
            path,
            data=encode_body(request.body),
            headers=request_headers(request),
        )

        raise_for_status = getattr(response, 'raise_for_status', None)
        if raise_for_status is not None:
            raise_for_status()

        return dom_to_object(response)
