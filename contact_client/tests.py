"""
Tests for the contact form client: validation, HTTP client, form state.
"""
import json
from unittest.mock import MagicMock, Mock

import pytest
import requests

from contact.exceptions import ContactValidationError
from contact.services import ContactStore
from contact_client.api import ContactAPI, ContactAPIError
from contact_client.form import ERROR_MESSAGE, SUCCESS_MESSAGE, ContactForm
from contact_client.validation import validate_form


VALID_FORM = {
    'name': 'Al',
    'email': 'a@b.com',
    'phone': '+15551234567',
    'message': 'Hello there, need help',
}


def make_response(status_code, payload, url='http://testserver/api/contact-us'):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(payload).encode()
    response.url = url
    return response


class TestValidateForm:

    def test_valid_form_has_no_errors(self):
        assert validate_form(VALID_FORM) == {}

    def test_empty_form_reports_every_field(self):
        errors = validate_form({'name': '', 'email': '', 'phone': '', 'message': ''})

        assert errors == {
            'name': 'Name is required',
            'email': 'Email is required',
            'phone': 'Phone number is required',
            'message': 'Message is required',
        }

    def test_missing_keys_count_as_empty(self):
        assert set(validate_form({})) == {'name', 'email', 'phone', 'message'}

    def test_values_are_trimmed_before_checking(self):
        errors = validate_form(dict(VALID_FORM, name=' A ', message='   short    '))

        assert errors == {
            'name': 'Name must be at least 2 characters long',
            'message': 'Message must be at least 10 characters long',
        }

    def test_whitespace_only_is_required_error(self):
        assert validate_form(dict(VALID_FORM, name='   '))['name'] == 'Name is required'

    @pytest.mark.parametrize('email', [
        'plain', 'a@b', 'a b@c.com', '@b.com',
        'a@b.c', 'a@b.1com', 'a..b@c.com', 'a@-b.com', 'a@b-.com',
    ])
    def test_bad_email(self, email):
        errors = validate_form(dict(VALID_FORM, email=email))

        assert errors == {'email': 'Please enter a valid email address'}

    @pytest.mark.parametrize('phone', ['0123456', '+0123', '555-1234', '1' * 17, '+'])
    def test_bad_phone(self, phone):
        errors = validate_form(dict(VALID_FORM, phone=phone))

        assert errors == {'phone': 'Please enter a valid phone number'}

    @pytest.mark.parametrize('phone', ['1', '+1', '15551234567', '+' + '9' * 16])
    def test_good_phone(self, phone):
        assert validate_form(dict(VALID_FORM, phone=phone)) == {}

    def test_boundaries(self):
        assert validate_form(dict(VALID_FORM, name='Al', message='x' * 10)) == {}


EMAIL_EDGE_CASES = [
    'a@b.com',
    'First.Last+tag@sub.example.co',
    "o'neil@example.ie",
    'a@b.c',
    'a@b.1com',
    'a..b@c.com',
    '.a@b.com',
    'a.@b.com',
    'a@-b.com',
    'a@b-.com',
    'a@b..com',
    'a@' + 'b' * 64 + '.com',
    'x' * 243 + '@example.com',
    'x' * 242 + '@example.com',
]


@pytest.mark.django_db
class TestClientServerAgreement:
    """The form only lets through what the store will accept."""

    @pytest.mark.parametrize('email', EMAIL_EDGE_CASES)
    def test_email_rule_matches_store(self, email):
        client_ok = 'email' not in validate_form(dict(VALID_FORM, email=email))

        try:
            ContactStore().create(dict(VALID_FORM, email=email))
        except ContactValidationError:
            server_ok = False
        else:
            server_ok = True

        assert client_ok == server_ok

    @pytest.mark.parametrize('phone', ['1', '+' + '9' * 16, '0123', '1' * 17, '+'])
    def test_phone_rule_matches_store(self, phone):
        client_ok = 'phone' not in validate_form(dict(VALID_FORM, phone=phone))

        try:
            ContactStore().create(dict(VALID_FORM, phone=phone))
        except ContactValidationError:
            server_ok = False
        else:
            server_ok = True

        assert client_ok == server_ok


class TestContactAPI:

    def setup_method(self):
        self.session = MagicMock()
        self.session.headers = {}
        self.api = ContactAPI(base_url='http://testserver/api/', timeout=5, session=self.session)

    def test_sets_json_headers(self):
        assert self.session.headers['Content-Type'] == 'application/json'

    def test_submit_form_posts_json(self):
        self.session.request.return_value = make_response(201, {'success': True})

        response = self.api.submit_form(VALID_FORM)

        assert response.status_code == 201
        self.session.request.assert_called_once_with(
            'POST', 'http://testserver/api/contact-us', timeout=5, json=VALID_FORM
        )

    def test_get_contacts_passes_only_given_params(self):
        self.session.request.return_value = make_response(200, {'success': True, 'data': []})

        self.api.get_contacts(page=2, status='new')

        self.session.request.assert_called_once_with(
            'GET', 'http://testserver/api/contacts', timeout=5,
            params={'page': 2, 'status': 'new'}
        )

    def test_get_contact_by_id_and_health(self):
        self.session.request.return_value = make_response(200, {'success': True})

        self.api.get_contact_by_id('abc')
        self.api.health_check()

        urls = [call.args[1] for call in self.session.request.call_args_list]
        assert urls == ['http://testserver/api/contacts/abc', 'http://testserver/api/health']

    def test_error_status_raises_with_server_payload(self):
        payload = {'success': False, 'message': 'Similar contact form submitted recently.'}
        self.session.request.return_value = make_response(429, payload)

        with pytest.raises(ContactAPIError) as excinfo:
            self.api.submit_form(VALID_FORM)

        assert excinfo.value.status_code == 429
        assert excinfo.value.data == payload
        assert excinfo.value.server_message == 'Similar contact form submitted recently.'

    def test_no_response_raises_without_status(self):
        self.session.request.side_effect = requests.ConnectionError('refused')

        with pytest.raises(ContactAPIError) as excinfo:
            self.api.health_check()

        assert excinfo.value.status_code is None
        assert excinfo.value.server_message is None


class TestContactForm:

    def setup_method(self):
        self.api = Mock()
        self.form = ContactForm(api=self.api)

    def fill(self, values=VALID_FORM):
        for name, value in values.items():
            self.form.handle_change(name, value)

    def test_initial_state(self):
        assert self.form.form_data == {'name': '', 'email': '', 'phone': '', 'message': ''}
        assert self.form.errors == {}
        assert self.form.is_submitting is False
        assert self.form.submit_status == ''
        assert self.form.submit_label == 'Submit'
        assert self.form.status_kind is None

    def test_change_clears_only_that_fields_error(self):
        self.form.handle_submit()
        assert set(self.form.errors) == {'name', 'email', 'phone', 'message'}

        self.form.handle_change('name', 'Al')

        assert 'name' not in self.form.errors
        assert set(self.form.errors) == {'email', 'phone', 'message'}

    def test_unknown_field_is_rejected(self):
        with pytest.raises(ValueError):
            self.form.handle_change('website', 'http://spam')

    def test_invalid_form_does_not_call_api(self):
        self.fill(dict(VALID_FORM, email='nope'))

        assert self.form.handle_submit() is False

        self.api.submit_form.assert_not_called()
        assert self.form.errors == {'email': 'Please enter a valid email address'}
        assert self.form.is_submitting is False

    def test_successful_submit_resets_fields(self):
        self.form.errors = {'phone': 'stale error'}
        self.fill()

        assert self.form.handle_submit() is True

        self.api.submit_form.assert_called_once_with(VALID_FORM)
        assert self.form.form_data == {'name': '', 'email': '', 'phone': '', 'message': ''}
        assert self.form.errors == {}
        assert self.form.submit_status == SUCCESS_MESSAGE
        assert self.form.status_kind == 'success'
        assert self.form.is_submitting is False

    def test_submitting_flag_and_label_while_in_flight(self):
        seen = {}

        def submit(data):
            seen['submitting'] = self.form.is_submitting
            seen['disabled'] = self.form.submit_disabled
            seen['label'] = self.form.submit_label
            seen['status'] = self.form.submit_status

        self.form.submit_status = 'old status'
        self.api.submit_form.side_effect = submit
        self.fill()
        self.form.handle_submit()

        assert seen == {
            'submitting': True, 'disabled': True, 'label': 'Submitting...', 'status': ''
        }
        assert self.form.submit_disabled is False

    def test_failed_submit_keeps_fields(self):
        self.api.submit_form.side_effect = ContactAPIError('timeout')
        self.fill()

        assert self.form.handle_submit() is False

        assert self.form.form_data == VALID_FORM
        assert self.form.submit_status == ERROR_MESSAGE
        assert self.form.status_kind == 'error'
        assert self.form.is_submitting is False

    def test_failed_submit_shows_server_message(self):
        self.api.submit_form.side_effect = ContactAPIError(
            '429', status_code=429,
            data={'success': False, 'message': 'Please wait 24 hours.'}
        )
        self.fill()

        self.form.handle_submit()

        assert self.form.submit_status == 'Please wait 24 hours.'

    def test_unexpected_error_still_clears_submitting(self):
        self.api.submit_form.side_effect = RuntimeError('bug')
        self.fill()

        with pytest.raises(RuntimeError):
            self.form.handle_submit()

        assert self.form.is_submitting is False
