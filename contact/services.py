"""
Contact Record Store

Data access for contact submissions: create, list, fetch, status
transition, delete and aggregate counts. Field rules are enforced here
through the model validators, independently of any client-side checks.
"""
import logging
import math
import uuid
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone

from .exceptions import (
    ContactNotFound,
    ContactValidationError,
    InvalidIdentifier,
    InvalidStatus,
)
from .filters import ContactFilter
from .models import Contact, ContactQuerySet

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('name', 'email', 'phone', 'message')
STATUS_VALUES = tuple(Contact.Status.values)


class ContactPage:
    """One page of contacts plus the numbers needed for pagination metadata."""

    def __init__(self, items, total, page, limit):
        self.items = items
        self.total = total
        self.page = page
        self.limit = limit

    @property
    def pages(self):
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self):
        return self.page < self.pages

    @property
    def has_prev(self):
        return self.page > 1

    def pagination(self):
        return {
            'current': self.page,
            'pages': self.pages,
            'total': self.total,
            'hasNext': self.has_next,
            'hasPrev': self.has_prev,
        }


def normalize_fields(fields):
    """Trim the required text fields and lowercase the email."""
    cleaned = {}
    for field in REQUIRED_FIELDS:
        value = fields.get(field)
        cleaned[field] = '' if value is None else str(value).strip()
    cleaned['email'] = cleaned['email'].lower()
    return cleaned


class ContactStore:
    """
    CRUD and aggregate operations over the contacts table.

    Usage:
        store = ContactStore()
        contact = store.create({'name': 'Al', ...}, ip_address='10.0.0.1')
        page = store.find_many(status='new', search='help', page=1, limit=10)

    ``queryset`` narrows the records the store sees. It must come from
    ``Contact.objects`` so the ContactQuerySet helpers are available.
    """

    def __init__(self, queryset=None):
        if queryset is None:
            queryset = Contact.objects.all()
        elif not isinstance(queryset, ContactQuerySet):
            raise TypeError(
                f"ContactStore needs a ContactQuerySet, got {type(queryset).__name__}"
            )
        self.queryset = queryset

    def _all(self):
        return self.queryset.all()

    @staticmethod
    def parse_id(contact_id):
        """Return ``contact_id`` as a UUID or raise InvalidIdentifier."""
        if isinstance(contact_id, uuid.UUID):
            return contact_id
        try:
            return uuid.UUID(str(contact_id))
        except (TypeError, ValueError, AttributeError):
            raise InvalidIdentifier()

    def create(self, fields, ip_address=None, user_agent=None):
        """
        Validate and persist a new submission.

        Raises:
            ContactValidationError: listing one message per violated field
        """
        contact = Contact(
            **normalize_fields(fields),
            ip_address=ip_address or None,
            user_agent=user_agent or None,
        )
        try:
            contact.full_clean()
        except DjangoValidationError as exc:
            errors = [
                message
                for messages in exc.message_dict.values()
                for message in messages
            ]
            raise ContactValidationError(errors)

        contact.save()
        return contact

    def find_recent_duplicate(self, email, message, within=None):
        """
        Most recent record with the same email and message inside the window.

        Compares normalized values, exact equality only.
        """
        if within is None:
            within = timedelta(hours=settings.CONTACT_DUPLICATE_WINDOW_HOURS)
        cleaned = normalize_fields({'email': email, 'message': message})
        return (
            self._all()
            .filter(email=cleaned['email'], message=cleaned['message'])
            .created_since(timezone.now() - within)
            .order_by('-created_at')
            .first()
        )

    def find_many(self, status=None, search=None, page=1, limit=None):
        """Filter, sort newest first and slice one page."""
        if limit is None:
            limit = settings.CONTACT_PAGE_SIZE
        filterset = ContactFilter(
            data={'status': status or '', 'search': search or ''},
            queryset=self._all(),
        )
        queryset = filterset.qs.order_by('-created_at')

        total = queryset.count()
        offset = (page - 1) * limit
        items = list(queryset[offset:offset + limit])
        return ContactPage(items, total, page, limit)

    def find_by_id(self, contact_id):
        pk = self.parse_id(contact_id)
        try:
            return self._all().get(pk=pk)
        except Contact.DoesNotExist:
            raise ContactNotFound()

    def update_status(self, contact_id, new_status):
        """
        Move a record to ``new_status``.

        Raises:
            InvalidStatus: status is not one of new, read, replied, archived
            InvalidIdentifier: malformed id
            ContactNotFound: no such record
        """
        if new_status not in STATUS_VALUES:
            raise InvalidStatus()

        contact = self.find_by_id(contact_id)
        contact.status = new_status
        contact.save(update_fields=['status', 'updated_at'])
        logger.info(f"Contact {contact.id} marked as {new_status}")
        return contact

    def delete_by_id(self, contact_id):
        contact = self.find_by_id(contact_id)
        contact.delete()
        logger.info(f"Contact {contact_id} deleted")
        return True

    def stats(self):
        """Totals per status and the number of submissions in the recent window."""
        queryset = self._all()
        counts = queryset.status_counts()
        recent_since = timezone.now() - timedelta(days=settings.CONTACT_RECENT_DAYS)

        return {
            'total': sum(counts.values()),
            'new': counts.get(Contact.Status.NEW, 0),
            'read': counts.get(Contact.Status.READ, 0),
            'replied': counts.get(Contact.Status.REPLIED, 0),
            'recent': queryset.created_since(recent_since).count(),
        }
