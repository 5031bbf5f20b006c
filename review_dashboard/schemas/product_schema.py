from marshmallow import EXCLUDE, Schema, fields, pre_load, validate

from review_dashboard.models.product import (
    CATEGORIES, NAME_MAX_LENGTH, NAME_MIN_LENGTH, PRICE_MAX, PRICE_MIN,
)


class ProductCreateSchema(Schema):
    """
    Schema para validação de criação de produto.
    """
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(
        required=True,
        validate=validate.Length(
            min=NAME_MIN_LENGTH, max=NAME_MAX_LENGTH,
            error=f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters."
        )
    )
    category = fields.Str(
        required=True,
        validate=validate.OneOf(CATEGORIES, error="Category must be one of: {choices}.")
    )
    price = fields.Decimal(
        required=True,
        places=2,
        validate=validate.Range(
            min=PRICE_MIN, max=PRICE_MAX,
            error=f"Price must be between {PRICE_MIN} and {PRICE_MAX}."
        )
    )

    @pre_load
    def _strip_name(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get('name'), str):
            data = dict(data)
            data['name'] = data['name'].strip()
        return data


class ProductSummarySchema(Schema):
    """Projeção mínima do produto junto às reviews."""
    id = fields.Int()
    name = fields.Str()
    category = fields.Str()
    price = fields.Float()


class ProductSchema(ProductSummarySchema):
    """
    Schema para serialização de produto com campos derivados.
    """
    price_range = fields.Str(data_key='priceRange')
    formatted_price = fields.Str(data_key='formattedPrice')
    created_at = fields.DateTime(data_key='createdAt')
    updated_at = fields.DateTime(data_key='updatedAt')
