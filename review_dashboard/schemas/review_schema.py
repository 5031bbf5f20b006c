from marshmallow import EXCLUDE, Schema, fields, pre_load, validate

from review_dashboard.models.review import COMMENT_MAX_LENGTH, RATING_MAX, RATING_MIN
from review_dashboard.schemas.product_schema import ProductSummarySchema

RATING_BUCKETS = {
    '1-2': (1, 2),
    '3': (3, 3),
    '4-5': (4, 5),
}

SORTABLE_FIELDS = {
    'createdAt': 'created_at',
    'updatedAt': 'updated_at',
    'rating': 'rating',
    'category': 'category',
    'id': 'id',
}


class ReviewCreateSchema(Schema):
    """
    Schema para validação de criação de review.
    """
    class Meta:
        unknown = EXCLUDE

    product_id = fields.Int(
        required=True,
        data_key='productId',
        validate=validate.Range(min=1, error="Product ID must be a positive integer."),
        error_messages={'required': 'Product ID is required.'}
    )
    rating = fields.Int(
        required=True,
        validate=validate.Range(
            min=RATING_MIN, max=RATING_MAX,
            error=f"Rating must be between {RATING_MIN} and {RATING_MAX}."
        ),
        error_messages={'required': 'Rating is required.'}
    )
    comment = fields.Str(
        allow_none=True,
        load_default=None,
        validate=validate.Length(
            max=COMMENT_MAX_LENGTH,
            error=f"Comment must be {COMMENT_MAX_LENGTH} characters or less."
        )
    )


class ReviewQuerySchema(Schema):
    """
    Parâmetros de listagem (query string) de reviews.
    """
    class Meta:
        unknown = EXCLUDE

    page = fields.Int(load_default=1, validate=validate.Range(min=1))
    limit = fields.Int(load_default=None, validate=validate.Range(min=1))
    category = fields.Str(load_default=None)
    rating = fields.Str(load_default=None, validate=validate.OneOf(list(RATING_BUCKETS)))
    sort_by = fields.Str(data_key='sortBy', load_default='createdAt', validate=validate.OneOf(list(SORTABLE_FIELDS)))
    sort_order = fields.Str(data_key='sortOrder', load_default='DESC', validate=validate.OneOf(['ASC', 'DESC']))

    @pre_load
    def _clean_query(self, data, **kwargs):
        # query string: valores vazios contam como ausentes; sortOrder é case-insensitive
        cleaned = {k: v for k, v in dict(data).items() if v not in (None, '')}
        if isinstance(cleaned.get('sortOrder'), str):
            cleaned['sortOrder'] = cleaned['sortOrder'].upper()
        return cleaned


class ReviewSchema(Schema):
    """
    Schema para serialização de review com o produto (projeção mínima).
    """
    id = fields.Int()
    product_id = fields.Int(data_key='productId')
    category = fields.Str()
    rating = fields.Int()
    comment = fields.Str(allow_none=True)
    comment_preview = fields.Method('get_comment_preview', data_key='commentPreview')
    created_at = fields.DateTime(data_key='createdAt')
    updated_at = fields.DateTime(data_key='updatedAt')
    product = fields.Nested(ProductSummarySchema, allow_none=True)

    def get_comment_preview(self, obj):
        return obj.comment_preview()


class ProductRefSchema(Schema):
    name = fields.Str()
    category = fields.Str()


class RecentReviewSchema(ReviewSchema):
    """Reviews recentes do painel: produto com apenas nome e categoria."""
    product = fields.Nested(ProductRefSchema, allow_none=True)
