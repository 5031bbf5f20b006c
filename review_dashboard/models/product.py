from decimal import Decimal
from typing import List, TYPE_CHECKING

from sqlalchemy import Column, String, Numeric, Index
from sqlalchemy.orm import Mapped

from review_dashboard.extensions.db import db
from review_dashboard.models.base_model import BaseModel
from review_dashboard.utils.price_ranges import classify, format_price

if TYPE_CHECKING:
    from review_dashboard.models.review import Review

CATEGORIES = [
    'Electronics',
    'Clothing',
    'Home & Garden',
    'Sports',
    'Beauty',
    'Food & Drink',
]

NAME_MIN_LENGTH = 5
NAME_MAX_LENGTH = 100
PRICE_MIN = Decimal('0.01')
PRICE_MAX = Decimal('99999.99')


class Product(BaseModel):
    __tablename__ = 'products'
    __table_args__ = (
        # (name, category) é único na aplicação; a checagem fica no serviço
        Index('ix_products_category_name', 'category', 'name'),
        Index('ix_products_price', 'price'),
    )

    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    category = Column(String(50), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)

    reviews: Mapped[List['Review']] = db.relationship(
        'Review', back_populates='product',
        cascade='all, delete-orphan', passive_deletes=True,
    )

    @property
    def price_range(self) -> str:
        return classify(self.price)

    @property
    def formatted_price(self) -> str:
        return format_price(self.price)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name!r} category={self.category!r}>"
