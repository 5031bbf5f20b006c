# client/transport.py

"""
Transporte em processo para o ApiClient.

Quando o dashboard e a API rodam na mesma aplicação, as chamadas passam pelo
``app.test_client()`` em vez de abrir uma conexão HTTP de volta para o próprio
servidor (que, com um único worker síncrono, ficaria bloqueado atendendo a
página do dashboard).
"""

from urllib.parse import urlsplit

import requests
from flask import Flask
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict


class FlaskAppAdapter(BaseAdapter):
    """Adapter do ``requests`` que despacha a requisição direto para o app WSGI."""

    def __init__(self, app: Flask):
        super().__init__()
        self.app = app

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        parts = urlsplit(request.url)
        body = request.body
        if isinstance(body, str):
            body = body.encode('utf-8')

        resp = self.app.test_client().open(
            parts.path or '/',
            base_url=f"{parts.scheme}://{parts.netloc}/",
            method=request.method,
            query_string=parts.query,
            headers=dict(request.headers),
            data=body,
        )

        response = requests.Response()
        response.status_code = resp.status_code
        response.reason = resp.status.split(' ', 1)[1] if ' ' in resp.status else ''
        response.headers = CaseInsensitiveDict(resp.headers)
        response.encoding = resp.mimetype_params.get('charset') or 'utf-8'
        response._content = resp.get_data()
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


def in_process_session(app: Flask) -> requests.Session:
    """``requests.Session`` cujas chamadas http(s) são atendidas pelo próprio ``app``."""
    http = requests.Session()
    adapter = FlaskAppAdapter(app)
    http.mount('http://', adapter)
    http.mount('https://', adapter)
    return http
