from marshmallow import EXCLUDE, Schema, ValidationError, fields, pre_load, validate


def validate_password(password: str) -> None:
    if not any(char.isdigit() for char in password):
        raise ValidationError("Password must contain at least one number.")


class UserSchema(Schema):
    """
    Schema para serialização de dados de usuário (sem senha).
    """
    id = fields.Int(dump_only=True)
    email = fields.Email()
    first_name = fields.Str(data_key='firstName')
    last_name = fields.Str(data_key='lastName')
    is_active = fields.Boolean(data_key='isActive')
    created_at = fields.DateTime(data_key='createdAt', dump_only=True)
    updated_at = fields.DateTime(data_key='updatedAt', dump_only=True)


class UserCreateSchema(Schema):
    """
    Schema para validação de criação de usuário (registro ou admin).
    """
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(
        required=True,
        validate=validate.Length(max=255),
        error_messages={"required": "Email is required."}
    )
    first_name = fields.Str(
        required=True,
        data_key='firstName',
        validate=validate.Length(min=1, max=50, error="First name must be between 1 and 50 characters."),
        error_messages={"required": "First name is required."}
    )
    last_name = fields.Str(
        required=True,
        data_key='lastName',
        validate=validate.Length(min=1, max=50, error="Last name must be between 1 and 50 characters."),
        error_messages={"required": "Last name is required."}
    )
    password = fields.Str(
        required=True,
        load_only=True,
        validate=[
            validate.Length(min=8, max=100, error="Password must be between 8 and 100 characters."),
            validate_password,
        ],
        error_messages={"required": "Password is required."}
    )

    @pre_load
    def _normalize(self, data, **kwargs):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ('email', 'firstName', 'lastName'):
            if isinstance(data.get(key), str):
                data[key] = data[key].strip()
        if isinstance(data.get('email'), str):
            data['email'] = data['email'].lower()
        return data
