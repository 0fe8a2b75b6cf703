"""
Contact Views

API endpoints for contact form submission and contact management.
The API is unauthenticated.
"""
import logging
from collections.abc import Mapping

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import InvalidStatus, PresenceError
from .serializers import (
    ContactSerializer,
    ContactStatsSerializer,
    ContactStatusSerializer,
    ContactSubmissionSerializer,
)
from .services import REQUIRED_FIELDS, ContactStore
from .spam_guard import check_duplicate_submission, get_client_ip, get_user_agent

logger = logging.getLogger(__name__)


def _positive_int(value, default):
    """Parse a query parameter, falling back to ``default`` when unusable."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


class ContactAPIView(APIView):
    """
    Base view for the contact endpoints.

    ``error_messages`` maps HTTP method to the generic text returned when
    an unexpected error escapes the view.
    """

    permission_classes = [AllowAny]
    store_class = ContactStore
    error_messages = {}

    def get_store(self):
        return self.store_class()


class ContactFormSubmitView(ContactAPIView):
    """
    Public endpoint for contact form submissions.

    POST /api/contact-us
    """

    error_messages = {'POST': 'Internal server error. Please try again later.'}

    def post(self, request):
        """Submit a contact form."""
        data = request.data if isinstance(request.data, Mapping) else {}
        missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
        if missing:
            raise PresenceError(missing)

        store = self.get_store()
        check_duplicate_submission(store, data['email'], data['message'])

        contact = store.create(
            {field: data.get(field) for field in REQUIRED_FIELDS},
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
        )

        return Response(
            {
                'success': True,
                'message': 'Thank you for contacting us! We will get back to you soon.',
                'data': ContactSubmissionSerializer(contact).data
            },
            status=status.HTTP_201_CREATED
        )


class ContactListView(ContactAPIView):
    """
    List contacts, newest first.

    GET /api/contacts

    Query Parameters:
    - page: Page number (default: 1)
    - limit: Items per page (default: 10)
    - status: new, read, replied, archived or all
    - search: Search in name, email or message
    """

    error_messages = {'GET': 'Error fetching contacts'}

    def get(self, request):
        params = request.query_params
        page = _positive_int(params.get('page'), 1)
        limit = min(
            _positive_int(params.get('limit'), settings.CONTACT_PAGE_SIZE),
            settings.CONTACT_MAX_PAGE_SIZE
        )

        result = self.get_store().find_many(
            status=params.get('status'),
            search=params.get('search'),
            page=page,
            limit=limit,
        )

        return Response({
            'success': True,
            'data': ContactSerializer(result.items, many=True).data,
            'pagination': result.pagination()
        })


class ContactDetailView(ContactAPIView):
    """
    GET /api/contacts/:id
    DELETE /api/contacts/:id
    """

    error_messages = {
        'GET': 'Error fetching contact',
        'DELETE': 'Error deleting contact',
    }

    def get(self, request, id):
        contact = self.get_store().find_by_id(id)
        return Response({
            'success': True,
            'data': ContactSerializer(contact).data
        })

    def delete(self, request, id):
        self.get_store().delete_by_id(id)
        return Response({
            'success': True,
            'message': 'Contact deleted successfully'
        })


class ContactStatusUpdateView(ContactAPIView):
    """
    Transition a contact to another status.

    PATCH /api/contacts/:id/status
    """

    error_messages = {'PATCH': 'Error updating contact status'}

    def patch(self, request, id):
        serializer = ContactStatusSerializer(
            data=request.data if isinstance(request.data, Mapping) else {}
        )
        if not serializer.is_valid():
            raise InvalidStatus()
        new_status = serializer.validated_data['status']

        contact = self.get_store().update_status(id, new_status)

        return Response({
            'success': True,
            'message': f'Contact marked as {new_status}',
            'data': ContactSerializer(contact).data
        })


class ContactStatsView(ContactAPIView):
    """
    Summary counts.

    GET /api/contacts/stats/summary
    """

    error_messages = {'GET': 'Error fetching statistics'}

    def get(self, request):
        stats = self.get_store().stats()
        return Response({
            'success': True,
            'data': ContactStatsSerializer(stats).data
        })
