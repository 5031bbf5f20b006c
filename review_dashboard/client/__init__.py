"""
Cliente HTTP do dashboard: sessão explícita, chamadas à API e montagem dos widgets.
"""

from review_dashboard.client.session import ClientSession
from review_dashboard.client.api_client import ApiClient, ClientApiError
from review_dashboard.client.dashboard import DashboardLoader, DashboardView, ReviewFilters, WidgetState, submit_review

__all__ = [
    'ClientSession', 'ApiClient', 'ClientApiError',
    'DashboardLoader', 'DashboardView', 'ReviewFilters', 'WidgetState', 'submit_review',
]
