from review_dashboard.forms.dashboard_form import LoginForm, ReviewForm

__all__ = ['LoginForm', 'ReviewForm']
