"""
Ponto de entrada WSGI para servidores de produção, ex.: ``gunicorn wsgi:app``.

O ambiente vem de FLASK_ENV; para o servidor de desenvolvimento use ``run.py``.
"""

from review_dashboard import create_app

app = create_app()
