# schemas/__init__.py

from typing import Any, Dict, Optional

from marshmallow import Schema, ValidationError as SchemaValidationError

from review_dashboard.utils.errors import ValidationError, details_from_messages


def load_or_raise(schema: Schema, data: Optional[Dict[str, Any]], message: str = 'Validation failed') -> Dict[str, Any]:
    """Carrega ``data`` com o schema; erros viram ValidationError (400) com detalhes por campo."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    try:
        return schema.load(data)
    except SchemaValidationError as e:
        raise ValidationError(message, details=details_from_messages(e.messages))
