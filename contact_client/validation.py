"""
Client-side validation for the contact form.

Pure functions, no I/O. The server checks the same rules again on its side.
"""
import re

from .rules import EMAIL_MAX_LENGTH, EMAIL_PATTERN, PHONE_PATTERN

FIELDS = ('name', 'email', 'phone', 'message')

EMAIL_REGEX = re.compile(EMAIL_PATTERN)
PHONE_REGEX = re.compile(PHONE_PATTERN)

NAME_MIN_LENGTH = 2
MESSAGE_MIN_LENGTH = 10


def _text(data, field):
    value = data.get(field)
    return '' if value is None else str(value).strip()


def validate_name(value):
    if not value:
        return 'Name is required'
    if len(value) < NAME_MIN_LENGTH:
        return 'Name must be at least 2 characters long'
    return None


def validate_email(value):
    if not value:
        return 'Email is required'
    if len(value) > EMAIL_MAX_LENGTH or not EMAIL_REGEX.match(value):
        return 'Please enter a valid email address'
    return None


def validate_phone(value):
    if not value:
        return 'Phone number is required'
    if not PHONE_REGEX.match(value):
        return 'Please enter a valid phone number'
    return None


def validate_message(value):
    if not value:
        return 'Message is required'
    if len(value) < MESSAGE_MIN_LENGTH:
        return 'Message must be at least 10 characters long'
    return None


VALIDATORS = {
    'name': validate_name,
    'email': validate_email,
    'phone': validate_phone,
    'message': validate_message,
}


def validate_form(data):
    """
    Check every field and collect the failures.

    Returns:
        dict: field name -> message, only for invalid fields. Empty when
        the form can be submitted.
    """
    errors = {}
    for field, validator in VALIDATORS.items():
        error = validator(_text(data, field))
        if error:
            errors[field] = error
    return errors
