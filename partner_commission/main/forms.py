# ==============================================================================
# partner_commission/main/forms.py
# ------------------------------------------------------------------------------
# Input validation for the JSON API using Flask-WTF / WTForms.
# ==============================================================================

from flask_wtf import FlaskForm
from wtforms import Form, StringField, PasswordField, DateField
from wtforms.validators import InputRequired, Optional, ValidationError


class PartnerLoginForm(FlaskForm):
    """Partner login; accepts a JSON body or form fields."""
    class Meta:
        csrf = False

    partner_code = StringField('Partner code', name='partnerCode',
                               validators=[InputRequired(message="Partner code is required.")])
    password = PasswordField('Password', validators=[InputRequired(message="Password is required.")])


class DateRangeForm(Form):
    """Optional inclusive date range from the query string."""
    from_date = DateField('From', name='fromDate', format='%Y-%m-%d', validators=[Optional()])
    to_date = DateField('To', name='toDate', format='%Y-%m-%d', validators=[Optional()])

    def validate_to_date(self, field):
        if self.from_date.data and field.data and field.data < self.from_date.data:
            raise ValidationError("toDate must not be before fromDate.")

    @property
    def bounds(self):
        """The range as canonical strings, None for an open end."""
        return tuple(d.strftime('%Y-%m-%d') if d else None
                     for d in (self.from_date.data, self.to_date.data))
