from datetime import date

from django.core.exceptions import ValidationError
from django.core.validators import RegexValidator
from django.utils import timezone

ADULT_AGE = 18

validate_address = RegexValidator(
    regex=r'^[a-zA-Z\d\s\-\,\#\.\+]+$',
    message='Address may only contain letters, digits, spaces and - , # . +',
)

validate_phone_number = RegexValidator(
    regex=r'^$|^\(?\d{2,4}\)?[\d\s-]+$',
    message='Enter a valid phone number.',
)


def adult_cutoff(today=None):
    """Latest birth date of someone who is at least ADULT_AGE years old."""
    today = today or timezone.localdate()
    try:
        return today.replace(year=today.year - ADULT_AGE)
    except ValueError:
        # 29 February in a non-leap target year
        return date(today.year - ADULT_AGE, 2, 28)


def validate_adult_birth_date(value):
    if value > adult_cutoff():
        raise ValidationError(
            "Date of birth can't be for setting an under aged user",
            code='before_or_equal',
        )
