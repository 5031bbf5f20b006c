from marshmallow import EXCLUDE, Schema, ValidationError, fields


def _required(message):
    def validator(value):
        if not value or not str(value).strip():
            raise ValidationError(message)
    return validator


class AuthLoginSchema(Schema):
    """
    Schema para validação de dados de login de usuário.
    """
    class Meta:
        unknown = EXCLUDE

    email = fields.Str(
        required=True,
        validate=_required("Email is required."),
        error_messages={"required": "Email is required."}
    )
    password = fields.Str(
        required=True,
        load_only=True,
        validate=_required("Password is required."),
        error_messages={"required": "Password is required."}
    )
