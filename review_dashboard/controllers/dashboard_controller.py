# controllers/dashboard_controller.py

"""
Dashboard web: páginas server-side que consomem a própria API via ApiClient.

A ClientSession (token + usuário) fica no cookie de sessão assinado do Flask.
"""

import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, session, url_for

from review_dashboard.client import ApiClient, ClientApiError, ClientSession, DashboardLoader, ReviewFilters, submit_review
from review_dashboard.client.dashboard import RATING_FILTERS, SORT_FIELDS
from review_dashboard.client.transport import in_process_session
from review_dashboard.forms import LoginForm, ReviewForm
from review_dashboard.models.product import CATEGORIES

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint('dashboard', __name__)

SESSION_KEY = 'client_session'


def _api_client() -> ApiClient:
    """Cliente da API: HTTP quando API_BASE_URL está definido, senão em processo."""
    client_session = ClientSession.from_dict(session.get(SESSION_KEY))
    timeout = current_app.config.get('API_TIMEOUT', 10.0)
    base_url = current_app.config.get('API_BASE_URL')
    if base_url:
        return ApiClient(base_url, session=client_session, timeout=timeout)
    return ApiClient(
        request.host_url,
        session=client_session,
        timeout=timeout,
        http=in_process_session(current_app._get_current_object()),
    )


def _store(client_session: ClientSession) -> None:
    if client_session.is_authenticated:
        session[SESSION_KEY] = client_session.to_dict()
    else:
        session.pop(SESSION_KEY, None)


@dashboard_bp.route('/login', methods=['GET', 'POST'])
def login():
    api = _api_client()
    if api.session.is_authenticated:
        return redirect(url_for('dashboard.index'))

    form = LoginForm()
    if form.validate_on_submit():
        try:
            api.login(form.email.data.strip(), form.password.data)
            _store(api.session)
            flash('Welcome back!', 'success')
            return redirect(url_for('dashboard.index'))
        except ClientApiError as e:
            logger.info(f"Dashboard login failed for {form.email.data}: {e.message}")
            flash(e.message if e.status else 'API unavailable, try again later.', 'danger')
    return render_template('login.html', form=form)


@dashboard_bp.route('/logout', methods=['POST'])
def logout():
    session.pop(SESSION_KEY, None)
    flash('You have been signed out.', 'info')
    return redirect(url_for('dashboard.login'))


@dashboard_bp.route('/', methods=['GET'])
def index():
    api = _api_client()
    if not api.session.is_authenticated:
        return redirect(url_for('dashboard.login'))

    filters = ReviewFilters.from_args(request.args)
    view = DashboardLoader(api).load(filters)

    # um 401 durante a carga limpa a sessão do cliente
    _store(api.session)
    if not api.session.is_authenticated:
        flash('Your session has expired. Please sign in again.', 'warning')
        return redirect(url_for('dashboard.login'))

    review_form = ReviewForm()
    products = view.products.data.get('products', []) if view.products.ok else []
    review_form.set_product_choices(products)
    categories = view.products.data.get('categories', CATEGORIES) if view.products.ok else CATEGORIES

    return render_template(
        'dashboard.html',
        view=view,
        filters=filters,
        review_form=review_form,
        user=api.session.user,
        categories=categories,
        rating_filters=RATING_FILTERS,
        sort_fields=SORT_FIELDS,
    )


@dashboard_bp.route('/reviews', methods=['POST'])
def add_review():
    api = _api_client()
    if not api.session.is_authenticated:
        return redirect(url_for('dashboard.login'))

    form = ReviewForm()
    try:
        form.set_product_choices(api.get_products().get('products', []))
    except ClientApiError as e:
        flash(f"Could not load products: {e.message}", 'danger')
        _store(api.session)
        return redirect(url_for('dashboard.index'))

    if not form.validate_on_submit():
        for field_errors in form.errors.values():
            for message in field_errors:
                flash(message, 'danger')
        return redirect(url_for('dashboard.index'))

    try:
        submit_review(api, form.product_id.data, form.rating.data, form.comment.data)
        flash('Review created successfully', 'success')
    except ClientApiError as e:
        logger.warning(f"Dashboard review submission failed: {e.message} (status={e.status})")
        flash(e.message, 'danger')
    _store(api.session)
    return redirect(url_for('dashboard.index'))
