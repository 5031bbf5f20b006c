# controllers/__init__.py

"""
Pacote de controllers da aplicação.
Importa e lista todos os Blueprints a serem registrados na aplicação Flask.
"""

from typing import List

from flask import Blueprint

from review_dashboard.controllers.auth_controller import auth_bp
from review_dashboard.controllers.product_controller import product_api_bp
from review_dashboard.controllers.review_controller import review_api_bp
from review_dashboard.controllers.user_controller import user_api_bp
from review_dashboard.controllers.dashboard_controller import dashboard_bp

# Lista de todos os Blueprints a serem registrados pela aplicação
BLUEPRINTS: List[Blueprint] = [
    auth_bp,
    product_api_bp,
    review_api_bp,
    user_api_bp,
    dashboard_bp,
]
