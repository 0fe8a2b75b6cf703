"""
Contact Models

Database schema for contact form submissions.
"""
import uuid
from django.db import models
from django.core.validators import (
    MaxLengthValidator,
    MinLengthValidator,
    RegexValidator,
)

from contact_client.rules import EMAIL_MAX_LENGTH, EMAIL_PATTERN, PHONE_PATTERN


class ContactQuerySet(models.QuerySet):

    def with_status(self, status):
        return self.filter(status=status)

    def created_since(self, since):
        return self.filter(created_at__gte=since)

    def status_counts(self):
        """Count of records per status, e.g. {'new': 3, 'read': 1}."""
        rows = self.order_by().values('status').annotate(count=models.Count('id'))
        return {row['status']: row['count'] for row in rows}


class Contact(models.Model):
    """
    A single contact form submission.

    Created only through the public submission endpoint. After creation
    only ``status`` changes.
    """

    class Status(models.TextChoices):
        NEW = 'new', 'New'
        READ = 'read', 'Read'
        REPLIED = 'replied', 'Replied'
        ARCHIVED = 'archived', 'Archived'

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    name = models.CharField(
        max_length=100,
        validators=[
            MinLengthValidator(2, message='Name must be at least 2 characters long'),
        ],
        error_messages={
            'blank': 'Name is required',
            'null': 'Name is required',
            'max_length': 'Name cannot exceed 100 characters',
        },
        help_text="Name of the person contacting us"
    )

    email = models.CharField(
        max_length=EMAIL_MAX_LENGTH,
        validators=[
            RegexValidator(EMAIL_PATTERN, message='Please enter a valid email address'),
        ],
        error_messages={
            'blank': 'Email is required',
            'null': 'Email is required',
            'max_length': 'Please enter a valid email address',
        },
        help_text="Lowercased email address for follow-up"
    )

    phone = models.CharField(
        max_length=17,
        validators=[
            RegexValidator(PHONE_PATTERN, message='Please enter a valid phone number'),
        ],
        error_messages={
            'blank': 'Phone number is required',
            'null': 'Phone number is required',
            'max_length': 'Please enter a valid phone number',
        },
        help_text="Phone number, optional leading +"
    )

    message = models.TextField(
        validators=[
            MinLengthValidator(10, message='Message must be at least 10 characters long'),
            MaxLengthValidator(1000, message='Message cannot exceed 1000 characters'),
        ],
        error_messages={
            'blank': 'Message is required',
            'null': 'Message is required',
        },
        help_text="The message content (10-1000 characters)"
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.NEW,
        db_index=True,
        help_text="Current status of the submission"
    )

    # Captured from the request, never client-supplied
    ip_address = models.GenericIPAddressField(
        null=True,
        blank=True,
        help_text="IP address of the submitter"
    )

    user_agent = models.TextField(
        null=True,
        blank=True,
        help_text="Browser user agent of the submitter"
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When the message was submitted"
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the record was last updated"
    )

    objects = ContactQuerySet.as_manager()

    class Meta:
        db_table = 'contacts'
        ordering = ['-created_at']
        verbose_name = 'Contact'
        verbose_name_plural = 'Contacts'
        indexes = [
            models.Index(fields=['email', '-created_at'], name='contacts_email_created_idx'),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}> ({self.status})"

    @property
    def formatted_date(self):
        """Submission time as e.g. 'October 18, 2026, 07:05 PM'."""
        if not self.created_at:
            return None
        return self.created_at.strftime('%B %d, %Y, %I:%M %p')

    def mark_as_read(self):
        """Mark submission as read."""
        self.status = self.Status.READ
        self.save(update_fields=['status', 'updated_at'])

    def mark_as_replied(self):
        """Mark submission as replied."""
        self.status = self.Status.REPLIED
        self.save(update_fields=['status', 'updated_at'])
