"""
HTTP client for the contact API.

Usage:
    api = ContactAPI()  # base URL from CONTACT_API_URL
    response = api.submit_form({'name': 'Al', 'email': 'a@b.com', ...})
    contacts = api.get_contacts(status='new').json()['data']
"""
import logging
import os

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = 'http://localhost:8000/api'
DEFAULT_TIMEOUT = 10  # seconds


class ContactAPIError(Exception):
    """
    Raised when a request fails.

    ``status_code`` and ``data`` are set when the server answered with an
    error status; both are None when no response was received.
    """

    def __init__(self, message, status_code=None, data=None):
        self.message = message
        self.status_code = status_code
        self.data = data
        super().__init__(message)

    @property
    def server_message(self):
        if isinstance(self.data, dict):
            return self.data.get('message')
        return None


def _json_or_text(response):
    try:
        return response.json()
    except ValueError:
        return response.text


class ContactAPI:
    """Thin wrapper around a ``requests.Session`` pointed at the API base URL."""

    def __init__(self, base_url=None, timeout=None, session=None):
        self.base_url = (base_url or os.getenv('CONTACT_API_URL', DEFAULT_API_URL)).rstrip('/')
        self.timeout = timeout or float(os.getenv('CONTACT_API_TIMEOUT', DEFAULT_TIMEOUT))
        self.session = session or requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        })

    def _request(self, method, path, **kwargs):
        url = f"{self.base_url}{path}"
        logger.info(f"Making {method} request to: {path}")

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
        except requests.HTTPError as exc:
            response = exc.response
            data = _json_or_text(response)
            logger.error(f"API Error: {response.status_code} {data}")
            raise ContactAPIError(str(exc), status_code=response.status_code, data=data) from exc
        except (requests.ConnectionError, requests.Timeout) as exc:
            logger.error(f"No response received from {url}: {exc}")
            raise ContactAPIError(str(exc)) from exc
        except requests.RequestException as exc:
            logger.error(f"API Error: {exc}")
            raise ContactAPIError(str(exc)) from exc

        return response

    def submit_form(self, form_data):
        return self._request('POST', '/contact-us', json=form_data)

    def get_contacts(self, page=None, limit=None, status=None, search=None):
        params = {
            key: value
            for key, value in (
                ('page', page), ('limit', limit), ('status', status), ('search', search)
            )
            if value is not None
        }
        return self._request('GET', '/contacts', params=params)

    def get_contact_by_id(self, contact_id):
        return self._request('GET', f'/contacts/{contact_id}')

    def health_check(self):
        return self._request('GET', '/health')
