# client/api_client.py

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from review_dashboard.client.session import ClientSession

logger = logging.getLogger(__name__)


class ClientApiError(Exception):
    """Falha de chamada à API; ``status`` 0 indica erro de rede."""

    def __init__(self, message: str, status: int = 0, details: Optional[List[Dict[str, Any]]] = None):
        self.message = message
        self.status = status
        self.details = details
        super().__init__(message)


class ApiClient:
    """
    Cliente JSON da API de reviews.

    O bearer token vem da ClientSession injetada; um 401 limpa essa sessão.
    """

    def __init__(self, base_url: str, session: Optional[ClientSession] = None, timeout: float = 10.0,
                 http: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.session = session if session is not None else ClientSession()
        self.timeout = timeout
        self.http = http or requests.Session()

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                 json: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        headers = {'Accept': 'application/json'}
        headers.update(self.session.auth_headers())
        try:
            resp = self.http.request(method, url, params=params, json=json, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"API request failed: {method} {url}: {e}")
            raise ClientApiError('Network error', status=0) from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not resp.ok:
            message = body.get('error') if isinstance(body, dict) and body.get('error') else (resp.reason or 'Request failed')
            details = body.get('details') if isinstance(body, dict) else None
            if resp.status_code == 401:
                self.session.logout()
            logger.debug(f"API error: {method} {path} -> {resp.status_code} {message}")
            raise ClientApiError(message, status=resp.status_code, details=details)
        return body

    # ---------- Auth ----------
    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request('POST', '/api/auth/login', json={'email': email, 'password': password})
        self.session.begin(data['token'], data.get('user'))
        return data

    def register(self, email: str, first_name: str, last_name: str, password: str) -> Dict[str, Any]:
        data = self._request('POST', '/api/auth/register', json={
            'email': email, 'firstName': first_name, 'lastName': last_name, 'password': password,
        })
        self.session.begin(data['token'], data.get('user'))
        return data

    def logout(self) -> None:
        self.session.logout()

    def get_profile(self) -> Dict[str, Any]:
        return self._request('GET', '/api/auth/profile')['user']

    # ---------- Products ----------
    def get_products(self) -> Dict[str, Any]:
        return self._request('GET', '/api/products')

    def get_products_by_category(self, category: str) -> List[Dict[str, Any]]:
        return self._request('GET', f"/api/products/category/{quote(category, safe='')}")['products']

    def get_products_by_price_range(self, price_range: str) -> List[Dict[str, Any]]:
        return self._request('GET', f"/api/products/price/{quote(price_range, safe='')}")['products']

    def get_product(self, product_id: int) -> Dict[str, Any]:
        return self._request('GET', f"/api/products/{int(product_id)}")['product']

    def create_product(self, name: str, category: str, price: Any) -> Dict[str, Any]:
        return self._request('POST', '/api/products', json={'name': name, 'category': category, 'price': price})['product']

    # ---------- Reviews ----------
    def get_reviews(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._request('GET', '/api/reviews', params=params or {})

    def get_review(self, review_id: int) -> Dict[str, Any]:
        return self._request('GET', f"/api/reviews/{int(review_id)}")['review']

    def create_review(self, product_id: int, rating: int, comment: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {'productId': product_id, 'rating': rating}
        if comment:
            payload['comment'] = comment
        return self._request('POST', '/api/reviews', json=payload)['review']

    def get_analytics(self) -> Dict[str, Any]:
        return self._request('GET', '/api/reviews/analytics')

    # ---------- Users ----------
    def get_user(self, user_id: int) -> Dict[str, Any]:
        return self._request('GET', f"/api/users/{int(user_id)}")

    def create_user(self, email: str, first_name: str, last_name: str, password: str) -> Dict[str, Any]:
        return self._request('POST', '/api/users', json={
            'email': email, 'firstName': first_name, 'lastName': last_name, 'password': password,
        })

    def delete_user(self, user_id: int) -> Dict[str, Any]:
        return self._request('DELETE', f"/api/users/{int(user_id)}")
