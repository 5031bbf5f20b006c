from unittest.mock import patch

import pytest

from review_dashboard.client import ApiClient, ClientApiError, DashboardLoader
from review_dashboard.client.dashboard import DashboardView, WidgetState
from review_dashboard.extensions import db
from review_dashboard.models import Review

USER = {'id': 1, 'email': 'staff@store.com', 'firstName': 'Store', 'lastName': 'Staff'}


def _fake_login(self, email, password):
    self.session.begin('tok', USER)
    return {'token': 'tok', 'user': USER}


def _loaded_view():
    return DashboardView(
        cards=WidgetState(data={'totalReviews': 2, 'avgRating': 3.0, 'bestCategory': 'Beauty',
                                'mostReviewedPriceRange': 'Under £20'}),
        charts=WidgetState(data={
            'ratings': {'labels': ['1 Star'], 'values': [1]},
            'priceRanges': {'labels': ['Under £20'], 'values': [2]},
            'categories': {'labels': ['Beauty'], 'values': [3.0], 'counts': [2]},
        }),
        attention=WidgetState(data={'products': [
            {'productId': 7, 'avgRating': 1.5, 'reviewCount': 2, 'product': {'name': 'Face Mask', 'category': 'Beauty'}},
        ], 'recentReviews': []}),
        table=WidgetState(data={'reviews': [], 'pagination': {
            'currentPage': 1, 'totalPages': 0, 'totalItems': 0, 'itemsPerPage': 10,
            'hasNextPage': False, 'hasPrevPage': False,
        }}),
        products=WidgetState(data={'products': [{'id': 7, 'name': 'Face Mask', 'category': 'Beauty'}],
                                   'categories': ['Beauty']}),
    )


@pytest.fixture
def logged_in(client):
    with patch.object(ApiClient, 'login', _fake_login):
        resp = client.post('/login', data={'email': 'staff@store.com', 'password': 'password123'})
    assert resp.status_code == 302
    return client


def test_index_redirects_to_login(client):
    resp = client.get('/')
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/login')


def test_login_page_renders(client):
    resp = client.get('/login')
    assert resp.status_code == 200
    assert b'Sign in' in resp.data


def test_login_failure_shows_message(client):
    with patch.object(ApiClient, 'login', side_effect=ClientApiError('Invalid email or password', status=401)):
        resp = client.post('/login', data={'email': 'staff@store.com', 'password': 'nope12345'})
    assert resp.status_code == 200
    assert b'Invalid email or password' in resp.data


def test_dashboard_renders_widgets(logged_in):
    with patch.object(DashboardLoader, 'load', return_value=_loaded_view()):
        resp = logged_in.get('/')
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert 'Beauty' in html
    assert 'Face Mask' in html
    assert 'Store Staff' in html


def test_widget_error_shows_retry(logged_in):
    view = _loaded_view()
    view.cards = WidgetState(error='Failed to get analytics')
    with patch.object(DashboardLoader, 'load', return_value=view):
        resp = logged_in.get('/')
    html = resp.get_data(as_text=True)
    assert 'Failed to get analytics' in html
    assert 'Retry' in html
    assert 'Face Mask' in html


def test_logout(logged_in):
    resp = logged_in.post('/logout')
    assert resp.status_code == 302
    assert logged_in.get('/').status_code == 302


def test_add_review_posts_through_client(logged_in):
    products = {'products': [{'id': 7, 'name': 'Face Mask', 'category': 'Beauty'}]}
    with patch.object(ApiClient, 'get_products', return_value=products), \
            patch.object(ApiClient, 'create_review', return_value={'id': 1}) as create:
        resp = logged_in.post('/reviews', data={'product_id': '7', 'rating': '4', 'comment': 'Nice'},
                              follow_redirects=False)
    assert resp.status_code == 302
    create.assert_called_once_with(7, 4, 'Nice')


def test_add_review_rejects_bad_rating(logged_in):
    products = {'products': [{'id': 7, 'name': 'Face Mask', 'category': 'Beauty'}]}
    with patch.object(ApiClient, 'get_products', return_value=products), \
            patch.object(ApiClient, 'create_review') as create:
        logged_in.post('/reviews', data={'product_id': '7', 'rating': '9'})
    create.assert_not_called()


class TestWithoutApiBaseUrl:
    """Sem API_BASE_URL o dashboard chama a API dentro do próprio processo."""

    @pytest.fixture
    def local_client(self, app):
        app.config['API_BASE_URL'] = None
        return app.test_client()

    def _login(self, local_client, user):
        resp = local_client.post('/login', data={'email': user.email, 'password': user.password})
        assert resp.status_code == 302
        assert not resp.headers['Location'].endswith('/login')

    def test_login_and_widgets_load(self, local_client, user, make_product, make_review):
        make_review(make_product(name='Face Mask', category='Beauty'), 2)
        self._login(local_client, user)

        resp = local_client.get('/')
        assert resp.status_code == 200
        html = resp.get_data(as_text=True)
        assert 'API unavailable' not in html
        assert 'Retry' not in html
        assert 'Face Mask' in html

    def test_wrong_password_reports_api_message(self, local_client, user):
        resp = local_client.post('/login', data={'email': user.email, 'password': 'wrong-password'})
        assert resp.status_code == 200
        assert b'Invalid email or password' in resp.data

    def test_add_review_reaches_database(self, app, local_client, user, make_product):
        product = make_product(name='Face Mask', category='Beauty')
        self._login(local_client, user)

        resp = local_client.post('/reviews', data={'product_id': str(product.id), 'rating': '4', 'comment': 'Nice'})
        assert resp.status_code == 302

        with app.app_context():
            reviews = db.session.scalars(db.select(Review)).all()
            assert [(r.product_id, r.rating, r.category) for r in reviews] == [(product.id, 4, 'Beauty')]
