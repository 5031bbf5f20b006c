from typing import TYPE_CHECKING

from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import Mapped

from review_dashboard.extensions.db import db
from review_dashboard.models.base_model import BaseModel

if TYPE_CHECKING:
    from review_dashboard.models.product import Product

RATING_MIN = 1
RATING_MAX = 5
COMMENT_MAX_LENGTH = 300
ATTENTION_THRESHOLD = 3


class Review(BaseModel):
    """
    Avaliação de um produto.

    ``category`` é uma cópia da categoria do produto no momento da criação.
    Nunca é ressincronizada: se a categoria do produto mudar depois, as
    análises continuam agrupando pela categoria histórica da review.
    """
    __tablename__ = 'reviews'
    __table_args__ = (
        CheckConstraint(f'rating >= {RATING_MIN} AND rating <= {RATING_MAX}', name='ck_reviews_rating_range'),
        Index('ix_reviews_category', 'category'),
        Index('ix_reviews_created_at', 'created_at'),
    )

    product_id = Column(
        Integer,
        ForeignKey('products.id', ondelete='CASCADE'),
        nullable=False,
        index=True
    )
    category = Column(String(50), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(String(COMMENT_MAX_LENGTH), nullable=True)

    product: Mapped['Product'] = db.relationship('Product', back_populates='reviews')

    @property
    def needs_attention(self) -> bool:
        return self.rating < ATTENTION_THRESHOLD

    def comment_preview(self, max_length: int = 50) -> str:
        if not self.comment:
            return ''
        if len(self.comment) > max_length:
            return self.comment[:max_length] + '...'
        return self.comment

    def __repr__(self):
        return f"<Review id={self.id} product_id={self.product_id} rating={self.rating}>"
