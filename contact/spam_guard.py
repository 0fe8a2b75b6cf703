"""
Spam Guard for the Contact Form

Request metadata capture and the duplicate-submission check.
"""
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import validate_ipv46_address

from .exceptions import DuplicateSubmission

logger = logging.getLogger(__name__)

USER_AGENT_MAX_LENGTH = 500


def _valid_ip(value):
    if not value:
        return None
    value = value.strip()
    try:
        validate_ipv46_address(value)
    except ValidationError:
        return None
    return value


def get_client_ip(request):
    """
    Get client IP address from request.

    X-Forwarded-For is only read when USE_X_FORWARDED_FOR is on, i.e.
    behind a proxy that overwrites the header.
    """
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for and settings.USE_X_FORWARDED_FOR:
        ip = _valid_ip(x_forwarded_for.split(',')[0])
        if ip:
            return ip
    return _valid_ip(request.META.get('REMOTE_ADDR'))


def get_user_agent(request):
    user_agent = request.META.get('HTTP_USER_AGENT', '')
    return user_agent[:USER_AGENT_MAX_LENGTH] or None


def check_duplicate_submission(store, email, message):
    """
    Reject a submission whose (email, message) pair was stored recently.

    This is a read followed by a separate insert, not one transaction:
    two identical requests arriving together can both pass and both be
    stored. Accepted as best-effort spam protection.

    Raises:
        DuplicateSubmission: if a matching record exists inside the window
    """
    duplicate = store.find_recent_duplicate(email, message)
    if duplicate is not None:
        logger.warning(f"Duplicate contact submission rejected for {duplicate.email}")
        raise DuplicateSubmission()
