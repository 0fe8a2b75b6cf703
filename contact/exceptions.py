"""
Contact Errors

Domain exceptions raised by the contact store and views, and the DRF
exception handler that renders every failure as
``{'success': False, 'message': ..., 'errors': [...]}``.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = 'Internal server error. Please try again later.'


class ContactError(Exception):
    """Base class for contact failures that are safe to show to the caller."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Bad request'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self):
        return {'success': False, 'message': self.message}


class PresenceError(ContactError):
    """A required field is missing from the request body."""

    default_message = 'All fields are required'

    def __init__(self, missing=None, message=None):
        self.missing = list(missing or [])
        super().__init__(message)


class ContactValidationError(ContactError):
    """One or more fields violate their format rules."""

    default_message = 'Validation failed'

    def __init__(self, errors, message=None):
        self.errors = list(errors)
        super().__init__(message)

    def to_payload(self):
        payload = super().to_payload()
        payload['errors'] = self.errors
        return payload


class DuplicateSubmission(ContactError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = 'Similar contact form submitted recently. Please wait 24 hours.'


class ContactNotFound(ContactError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Contact not found'


class InvalidIdentifier(ContactError):
    default_message = 'Invalid contact ID'


class InvalidStatus(ContactError):
    default_message = 'Valid status is required: new, read, replied, or archived'


class InternalError(ContactError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = GENERIC_ERROR_MESSAGE


def contact_exception_handler(exc, context):
    """
    Render errors in the API envelope.

    Contact errors carry their own message. DRF errors (bad JSON, wrong
    method) keep their status code. Anything else is logged and collapsed
    to a 500 with the view's generic message for the request method.
    """
    if isinstance(exc, ContactError):
        return Response(exc.to_payload(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        detail = response.data.get('detail') if isinstance(response.data, dict) else None
        payload = {'success': False, 'message': str(detail) if detail else 'Request failed'}
        if detail is None:
            payload['errors'] = response.data
        response.data = payload
        return response

    view = context.get('view')
    logger.exception(
        "Unhandled error in %s", view.__class__.__name__ if view else 'unknown view'
    )
    request = context.get('request')
    messages = getattr(view, 'error_messages', None) or {}
    error = InternalError(messages.get(getattr(request, 'method', None)))
    return Response(error.to_payload(), status=error.status_code)
