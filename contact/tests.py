"""
Tests for the contact submission and management API.
"""
import uuid
from datetime import datetime, timedelta, timezone as dt_timezone
from io import StringIO
from unittest.mock import Mock, patch

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db.models import QuerySet
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from contact.exceptions import (
    GENERIC_ERROR_MESSAGE,
    ContactNotFound,
    ContactValidationError,
    InternalError,
    InvalidIdentifier,
    InvalidStatus,
    contact_exception_handler,
)
from contact.models import Contact
from contact.services import ContactStore
from contact_client.api import ContactAPIError


VALID_SUBMISSION = {
    'name': 'Al',
    'email': 'a@b.com',
    'phone': '+15551234567',
    'message': 'Hello there, need help',
}


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_contact(db):
    """Create a contact, optionally backdated by ``age``."""
    counter = {'n': 0}

    def _make(age=None, **overrides):
        counter['n'] += 1
        fields = {
            'name': f'Person {counter["n"]}',
            'email': f'person{counter["n"]}@example.com',
            'phone': '+233200000001',
            'message': f'Question number {counter["n"]} about the service.',
        }
        fields.update(overrides)
        contact = Contact.objects.create(**fields)
        if age is not None:
            Contact.objects.filter(pk=contact.pk).update(created_at=timezone.now() - age)
            contact.refresh_from_db()
        return contact

    return _make


@pytest.fixture
def sample_contact(make_contact):
    return make_contact(
        name='John Doe',
        email='john@example.com',
        message='This is a test message about the pricing page.',
    )


def backdate(contact, **delta):
    Contact.objects.filter(pk=contact.pk).update(created_at=timezone.now() - timedelta(**delta))


@pytest.mark.django_db
class TestContactFormSubmission:
    """Public contact form submission."""

    def test_submit_valid_contact_form(self, api_client):
        response = api_client.post(
            '/api/contact-us', VALID_SUBMISSION, format='json',
            HTTP_USER_AGENT='pytest-browser/1.0'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        assert response.data['data']['name'] == 'Al'
        assert response.data['data']['email'] == 'a@b.com'
        assert set(response.data['data']) == {'id', 'name', 'email', 'createdAt'}

        contact = Contact.objects.get()
        assert contact.status == 'new'
        assert contact.phone == '+15551234567'
        assert contact.ip_address == '127.0.0.1'
        assert contact.user_agent == 'pytest-browser/1.0'

    def test_fields_are_trimmed_and_email_lowercased(self, api_client):
        data = {
            'name': '  Alice  ',
            'email': '  Alice@Example.COM ',
            'phone': ' 15551234567 ',
            'message': '   Please call me back tomorrow.   ',
        }

        response = api_client.post('/api/contact-us', data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        contact = Contact.objects.get()
        assert contact.name == 'Alice'
        assert contact.email == 'alice@example.com'
        assert contact.phone == '15551234567'
        assert contact.message == 'Please call me back tomorrow.'

    def test_forwarded_for_header_is_used_behind_proxy(self, api_client, settings):
        settings.USE_X_FORWARDED_FOR = True

        api_client.post(
            '/api/contact-us', VALID_SUBMISSION, format='json',
            HTTP_X_FORWARDED_FOR='203.0.113.7, 10.0.0.1'
        )

        assert Contact.objects.get().ip_address == '203.0.113.7'

    def test_forwarded_for_header_is_ignored_by_default(self, api_client):
        api_client.post(
            '/api/contact-us', VALID_SUBMISSION, format='json',
            HTTP_X_FORWARDED_FOR='203.0.113.7'
        )

        assert Contact.objects.get().ip_address == '127.0.0.1'

    @pytest.mark.parametrize('email', ['a@b.c', 'a@b.1com', 'a..b@c.com', 'a@-b.com'])
    def test_malformed_email_is_rejected(self, api_client, email):
        response = api_client.post(
            '/api/contact-us', dict(VALID_SUBMISSION, email=email), format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'] == ['Please enter a valid email address']
        assert not Contact.objects.exists()

    def test_client_supplied_metadata_is_ignored(self, api_client):
        data = dict(VALID_SUBMISSION, ipAddress='1.2.3.4', status='replied')

        api_client.post('/api/contact-us', data, format='json')

        contact = Contact.objects.get()
        assert contact.ip_address == '127.0.0.1'
        assert contact.status == 'new'

    def test_submit_missing_required_fields(self, api_client):
        response = api_client.post('/api/contact-us', {'name': 'Test User'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['message'] == 'All fields are required'
        assert Contact.objects.count() == 0

    def test_submit_invalid_fields_lists_every_error(self, api_client):
        data = {
            'name': 'A',
            'email': 'invalid-email',
            'phone': '0123',
            'message': 'Short',
        }

        response = api_client.post('/api/contact-us', data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Validation failed'
        assert response.data['errors'] == [
            'Name must be at least 2 characters long',
            'Please enter a valid email address',
            'Please enter a valid phone number',
            'Message must be at least 10 characters long',
        ]
        assert Contact.objects.count() == 0

    def test_duplicate_within_24_hours_is_rejected(self, api_client):
        first = api_client.post('/api/contact-us', VALID_SUBMISSION, format='json')
        second = api_client.post('/api/contact-us', VALID_SUBMISSION, format='json')

        assert first.status_code == status.HTTP_201_CREATED
        assert second.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert second.data['message'] == (
            'Similar contact form submitted recently. Please wait 24 hours.'
        )
        assert Contact.objects.count() == 1

    def test_duplicate_check_ignores_email_case(self, api_client):
        api_client.post('/api/contact-us', VALID_SUBMISSION, format='json')
        data = dict(VALID_SUBMISSION, email='A@B.COM')

        response = api_client.post('/api/contact-us', data, format='json')

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS

    def test_same_pair_after_24_hours_is_accepted(self, api_client):
        api_client.post('/api/contact-us', VALID_SUBMISSION, format='json')
        backdate(Contact.objects.get(), hours=25)

        response = api_client.post('/api/contact-us', VALID_SUBMISSION, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Contact.objects.count() == 2

    def test_different_message_is_accepted(self, api_client):
        api_client.post('/api/contact-us', VALID_SUBMISSION, format='json')
        data = dict(VALID_SUBMISSION, message='A different question entirely')

        response = api_client.post('/api/contact-us', data, format='json')

        assert response.status_code == status.HTTP_201_CREATED

    def test_unexpected_error_returns_generic_message(self, api_client):
        with patch.object(ContactStore, 'create', side_effect=RuntimeError('db exploded')):
            response = api_client.post('/api/contact-us', VALID_SUBMISSION, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {
            'success': False,
            'message': 'Internal server error. Please try again later.',
        }


class TestContactList:
    """Listing with pagination, status filter and search."""

    def test_second_page_of_fifteen(self, api_client, make_contact):
        for _ in range(15):
            make_contact()

        response = api_client.get('/api/contacts', {'page': 2, 'limit': 10})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['data']) == 5
        assert response.data['pagination'] == {
            'current': 2,
            'pages': 2,
            'total': 15,
            'hasNext': False,
            'hasPrev': True,
        }

    def test_defaults_to_first_page_of_ten(self, api_client, make_contact):
        for _ in range(12):
            make_contact()

        response = api_client.get('/api/contacts')

        assert len(response.data['data']) == 10
        assert response.data['pagination']['current'] == 1
        assert response.data['pagination']['hasNext'] is True
        assert response.data['pagination']['hasPrev'] is False

    def test_unparseable_page_falls_back_to_defaults(self, api_client, make_contact):
        make_contact()

        response = api_client.get('/api/contacts', {'page': 'abc', 'limit': '-5'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['pagination']['current'] == 1
        assert len(response.data['data']) == 1

    def test_empty_listing(self, api_client, db):
        response = api_client.get('/api/contacts')

        assert response.data['data'] == []
        assert response.data['pagination']['pages'] == 0
        assert response.data['pagination']['hasNext'] is False

    def test_sorted_newest_first(self, api_client, make_contact):
        old = make_contact(age=timedelta(days=3))
        new = make_contact(age=timedelta(minutes=1))

        response = api_client.get('/api/contacts')

        ids = [item['id'] for item in response.data['data']]
        assert ids == [str(new.id), str(old.id)]

    def test_filter_by_status(self, api_client, make_contact):
        make_contact()
        make_contact(status='read')
        make_contact(status='archived')

        response = api_client.get('/api/contacts', {'status': 'new'})

        assert [item['status'] for item in response.data['data']] == ['new']

    @pytest.mark.parametrize('params', [{}, {'status': 'all'}])
    def test_all_or_missing_status_returns_everything(self, api_client, make_contact, params):
        make_contact()
        make_contact(status='read')
        make_contact(status='replied')

        response = api_client.get('/api/contacts', params)

        assert response.data['pagination']['total'] == 3

    def test_search_matches_name_email_or_message(self, api_client, make_contact):
        make_contact(name='Grace Hopper')
        make_contact(email='GRACE@navy.mil')
        make_contact(message='Amazing grace, how sweet the sound.')
        make_contact(name='Alan Turing')

        response = api_client.get('/api/contacts', {'search': 'grace'})

        assert response.data['pagination']['total'] == 3

    def test_search_combines_with_status(self, api_client, make_contact):
        make_contact(name='Grace Hopper', status='read')
        make_contact(name='Grace Kelly')

        response = api_client.get('/api/contacts', {'search': 'grace', 'status': 'read'})

        assert [item['name'] for item in response.data['data']] == ['Grace Hopper']

    def test_records_include_full_fields(self, api_client, sample_contact):
        response = api_client.get('/api/contacts')

        record = response.data['data'][0]
        assert record['name'] == 'John Doe'
        assert record['phone'] == '+233200000001'
        assert {'ipAddress', 'userAgent', 'createdAt', 'updatedAt', 'formattedDate'} <= set(record)

    def test_unexpected_error_uses_listing_message(self, api_client, db):
        with patch.object(ContactStore, 'find_many', side_effect=RuntimeError('boom')):
            response = api_client.get('/api/contacts')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['message'] == 'Error fetching contacts'


class TestContactDetail:

    def test_get_contact(self, api_client, sample_contact):
        response = api_client.get(f'/api/contacts/{sample_contact.id}')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['name'] == 'John Doe'
        assert response.data['data']['email'] == 'john@example.com'

    def test_get_missing_contact(self, api_client, db):
        response = api_client.get(f'/api/contacts/{uuid.uuid4()}')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'success': False, 'message': 'Contact not found'}

    def test_get_malformed_id(self, api_client, db):
        response = api_client.get('/api/contacts/not-an-id')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Invalid contact ID'


class TestContactStatusUpdate:

    def test_update_status(self, api_client, sample_contact):
        response = api_client.patch(
            f'/api/contacts/{sample_contact.id}/status', {'status': 'read'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Contact marked as read'
        assert response.data['data']['status'] == 'read'
        sample_contact.refresh_from_db()
        assert sample_contact.status == 'read'

    def test_update_keeps_created_at(self, api_client, sample_contact):
        created_at = sample_contact.created_at

        api_client.patch(
            f'/api/contacts/{sample_contact.id}/status', {'status': 'archived'}, format='json'
        )

        sample_contact.refresh_from_db()
        assert sample_contact.created_at == created_at
        assert sample_contact.updated_at >= created_at

    @pytest.mark.parametrize(
        'body', [
            {'status': 'closed'}, {'status': ''}, {}, {'status': ['read']}, {'status': ' read '},
        ]
    )
    def test_invalid_status_is_rejected(self, api_client, sample_contact, body):
        response = api_client.patch(
            f'/api/contacts/{sample_contact.id}/status', body, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == (
            'Valid status is required: new, read, replied, or archived'
        )
        sample_contact.refresh_from_db()
        assert sample_contact.status == 'new'

    def test_update_missing_contact(self, api_client, db):
        response = api_client.patch(
            f'/api/contacts/{uuid.uuid4()}/status', {'status': 'read'}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_malformed_id(self, api_client, db):
        response = api_client.patch(
            '/api/contacts/12345/status', {'status': 'read'}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['message'] == 'Invalid contact ID'


class TestContactDelete:

    def test_delete_then_fetch_is_not_found(self, api_client, sample_contact):
        response = api_client.delete(f'/api/contacts/{sample_contact.id}')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'success': True, 'message': 'Contact deleted successfully'}

        follow_up = api_client.get(f'/api/contacts/{sample_contact.id}')
        assert follow_up.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_missing_contact(self, api_client, db):
        response = api_client.delete(f'/api/contacts/{uuid.uuid4()}')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_malformed_id(self, api_client, db):
        response = api_client.delete('/api/contacts/xyz')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestContactStats:

    def test_stats_summary(self, api_client, make_contact):
        make_contact()
        make_contact()
        make_contact(status='read')
        make_contact(status='replied')
        make_contact(status='archived', age=timedelta(days=8))

        response = api_client.get('/api/contacts/stats/summary')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'success': True,
            'data': {'total': 5, 'new': 2, 'read': 1, 'replied': 1, 'recent': 4},
        }

    def test_stats_on_empty_table(self, api_client, db):
        response = api_client.get('/api/contacts/stats/summary')

        assert response.data['data'] == {
            'total': 0, 'new': 0, 'read': 0, 'replied': 0, 'recent': 0
        }


class TestContactStore:
    """Store-level rules, independent of the HTTP layer."""

    def test_create_enumerates_all_missing_fields(self, db):
        with pytest.raises(ContactValidationError) as excinfo:
            ContactStore().create({})

        assert excinfo.value.errors == [
            'Name is required',
            'Email is required',
            'Phone number is required',
            'Message is required',
        ]

    def test_create_rejects_whitespace_only_fields(self, db):
        with pytest.raises(ContactValidationError) as excinfo:
            ContactStore().create(dict(VALID_SUBMISSION, name='   '))

        assert excinfo.value.errors == ['Name is required']

    def test_create_enforces_maximum_lengths(self, db):
        fields = dict(VALID_SUBMISSION, name='x' * 101, message='y' * 1001)

        with pytest.raises(ContactValidationError) as excinfo:
            ContactStore().create(fields)

        assert excinfo.value.errors == [
            'Name cannot exceed 100 characters',
            'Message cannot exceed 1000 characters',
        ]

    def test_create_accepts_numeric_phone(self, db):
        contact = ContactStore().create(dict(VALID_SUBMISSION, phone=15551234567))

        assert contact.phone == '15551234567'
        assert contact.status == 'new'
        assert contact.created_at is not None

    def test_find_by_id_invalid(self, db):
        with pytest.raises(InvalidIdentifier):
            ContactStore().find_by_id('nope')

    def test_find_by_id_missing(self, db):
        with pytest.raises(ContactNotFound):
            ContactStore().find_by_id(uuid.uuid4())

    def test_update_status_rejects_unknown_value(self, sample_contact):
        with pytest.raises(InvalidStatus):
            ContactStore().update_status(sample_contact.id, 'spam')

        sample_contact.refresh_from_db()
        assert sample_contact.status == 'new'

    def test_find_recent_duplicate_respects_window(self, make_contact):
        contact = make_contact(email='dup@example.com', message='Exactly the same text')
        store = ContactStore()

        assert store.find_recent_duplicate(' DUP@example.com', 'Exactly the same text ') == contact

        backdate(contact, hours=24, minutes=1)
        assert store.find_recent_duplicate('dup@example.com', 'Exactly the same text') is None


    def test_store_rejects_plain_queryset(self, db):
        with pytest.raises(TypeError):
            ContactStore(queryset=QuerySet(model=Contact))

    def test_store_scoped_to_injected_queryset(self, make_contact):
        make_contact(status='read')
        make_contact(status='archived')

        stats = ContactStore(queryset=Contact.objects.exclude(status='archived')).stats()

        assert stats == {'total': 1, 'new': 0, 'read': 1, 'replied': 0, 'recent': 1}


class TestExceptionHandler:

    def test_unhandled_error_uses_view_message(self):
        context = {
            'view': Mock(error_messages={'GET': 'Error fetching contacts'}),
            'request': Mock(method='GET'),
        }

        response = contact_exception_handler(RuntimeError('boom'), context)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'success': False, 'message': 'Error fetching contacts'}

    def test_unhandled_error_without_view_message(self):
        response = contact_exception_handler(KeyError('x'), {})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'success': False, 'message': GENERIC_ERROR_MESSAGE}

    def test_internal_error_raised_directly(self):
        response = contact_exception_handler(InternalError(), {})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['message'] == GENERIC_ERROR_MESSAGE


class TestContactModel:

    def test_mark_as_read_and_replied(self, sample_contact):
        sample_contact.mark_as_read()
        assert Contact.objects.get(pk=sample_contact.pk).status == 'read'

        sample_contact.mark_as_replied()
        assert Contact.objects.get(pk=sample_contact.pk).status == 'replied'

    def test_formatted_date(self, sample_contact):
        Contact.objects.filter(pk=sample_contact.pk).update(
            created_at=datetime(2026, 10, 18, 19, 5, tzinfo=dt_timezone.utc)
        )
        sample_contact.refresh_from_db()

        assert sample_contact.formatted_date == 'October 18, 2026, 07:05 PM'

    def test_status_counts(self, make_contact):
        make_contact()
        make_contact(status='read')
        make_contact(status='read')

        assert Contact.objects.status_counts() == {'new': 1, 'read': 2}


class TestContactFormCommand:
    """Terminal rendering of the contact form."""

    def run(self, api, *args, **options):
        out = StringIO()
        with patch('contact.management.commands.contact_form.ContactAPI', return_value=api):
            call_command('contact_form', *args, stdout=out, **options)
        return out.getvalue()

    def test_submits_given_values(self):
        api = Mock()

        output = self.run(api, no_input=True, **VALID_SUBMISSION)

        api.submit_form.assert_called_once_with(VALID_SUBMISSION)
        assert 'Form Submitted' in output

    def test_invalid_values_without_input_fail(self):
        api = Mock()

        with pytest.raises(CommandError):
            self.run(api, no_input=True, **dict(VALID_SUBMISSION, phone='abc'))

        api.submit_form.assert_not_called()

    def test_reprompts_only_invalid_fields(self):
        api = Mock()

        with patch('builtins.input', side_effect=['+15551234567']) as prompt:
            output = self.run(api, **dict(VALID_SUBMISSION, phone='abc'))

        prompt.assert_called_once_with('Phone *: ')
        assert 'phone: Please enter a valid phone number' in output
        assert 'Form Submitted' in output

    def test_server_rejection_is_reported(self):
        api = Mock()
        api.submit_form.side_effect = ContactAPIError(
            '429', status_code=429, data={'message': 'Similar contact form submitted recently.'}
        )

        with pytest.raises(CommandError, match='Similar contact form submitted recently.'):
            self.run(api, no_input=True, **VALID_SUBMISSION)
