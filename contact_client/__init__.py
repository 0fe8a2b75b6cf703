"""
Contact Form Client

Client half of the contact feature:
- validation: field rules checked before any request is made
- api: HTTP client for the contact API
- form: form state (fields, inline errors, submitting flag, status text)
"""
from .api import ContactAPI
from .form import ContactForm
from .validation import validate_form

__all__ = ['ContactAPI', 'ContactForm', 'validate_form']
