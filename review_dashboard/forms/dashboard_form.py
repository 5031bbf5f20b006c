# forms/dashboard_form.py

from flask_wtf import FlaskForm
from wtforms import IntegerField, PasswordField, SelectField, StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Email, Length, NumberRange, Optional

from review_dashboard.models.review import COMMENT_MAX_LENGTH, RATING_MAX, RATING_MIN


class LoginForm(FlaskForm):
    email = StringField(
        'Email',
        validators=[
            DataRequired(message="Email is required."),
            Email(message="Enter a valid email address."),
            Length(max=255),
        ],
        render_kw={"placeholder": "you@store.com", "autocomplete": "email", "autocapitalize": "none", "spellcheck": "false"}
    )
    password = PasswordField(
        'Password',
        validators=[DataRequired(message="Password is required.")],
        render_kw={"placeholder": "Password", "autocomplete": "current-password"}
    )
    submit = SubmitField('Sign in')


class ReviewForm(FlaskForm):
    """Formulário do modal "Add review"; as opções de produto vêm da API."""

    product_id = SelectField(
        'Product',
        coerce=int,
        validators=[DataRequired(message="Please select a product.")],
    )
    rating = IntegerField(
        'Rating',
        validators=[
            DataRequired(message="Rating is required."),
            NumberRange(RATING_MIN, RATING_MAX, message=f"Rating must be between {RATING_MIN} and {RATING_MAX}."),
        ],
        render_kw={"min": RATING_MIN, "max": RATING_MAX}
    )
    comment = TextAreaField(
        'Comment',
        validators=[
            Optional(),
            Length(max=COMMENT_MAX_LENGTH, message=f"Comment must be at most {COMMENT_MAX_LENGTH} characters."),
        ],
        render_kw={"maxlength": COMMENT_MAX_LENGTH, "rows": 3}
    )
    submit = SubmitField('Add review')

    def set_product_choices(self, products):
        self.product_id.choices = [(0, 'Select a product')] + [
            (p['id'], f"{p['name']} ({p['category']})") for p in products
        ]
