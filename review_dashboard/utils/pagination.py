# utils/pagination.py

from typing import Any, Dict, Optional

from flask import current_app
from flask_sqlalchemy.pagination import Pagination

from review_dashboard.extensions import db


def clamp_per_page(per_page: Optional[int]) -> int:
    """
    Aplica os limites de configuração ao tamanho da página.

    Configurável via app.config:
      - PAGINATION_DEFAULT_PER_PAGE (int, default 10)
      - PAGINATION_MAX_PER_PAGE (int, default 100)
    """
    default_per = current_app.config.get('PAGINATION_DEFAULT_PER_PAGE', 10)
    max_per = current_app.config.get('PAGINATION_MAX_PER_PAGE', 100)
    if per_page is None:
        return default_per
    return max(1, min(int(per_page), max_per))


def paginate_select(statement: Any, page: int, per_page: int) -> Pagination:
    """
    Paginates a SQLAlchemy select() using Flask-SQLAlchemy's Pagination.

    Pages past the end return an empty item list instead of aborting with 404.
    """
    current_app.logger.debug(f"paginate_select: page={page}, per_page={per_page}")
    return db.paginate(statement, page=page, per_page=per_page, error_out=False, count=True)


def pagination_info(pagination: Pagination) -> Dict[str, Any]:
    """Converts a Pagination into the API's PaginationInfo shape."""
    return {
        'currentPage': pagination.page,
        'totalPages': pagination.pages,
        'totalItems': pagination.total,
        'itemsPerPage': pagination.per_page,
        'hasNextPage': pagination.page < pagination.pages,
        'hasPrevPage': pagination.page > 1,
    }
