"""
Contact form state.

Holds the four controlled inputs, inline field errors, the submitting
flag and a single status string. Rendering is left to the caller, which
feeds change and submit events in and reads the state back out.
"""
import logging

from .api import ContactAPI, ContactAPIError
from .validation import FIELDS, validate_form

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = 'Form Submitted'
ERROR_MESSAGE = 'Error submitting form. Please try again.'


def empty_form():
    return dict.fromkeys(FIELDS, '')


class ContactForm:
    """
    Usage:
        form = ContactForm(api)
        form.handle_change('name', 'Al')
        ...
        if not form.submit_disabled:
            form.handle_submit()
        print(form.errors, form.submit_status)
    """

    def __init__(self, api=None):
        self.api = api or ContactAPI()
        self.form_data = empty_form()
        self.errors = {}
        self.is_submitting = False
        self.submit_status = ''
        self._succeeded = None

    @property
    def submit_disabled(self):
        return self.is_submitting

    @property
    def submit_label(self):
        return 'Submitting...' if self.is_submitting else 'Submit'

    @property
    def status_kind(self):
        """'success' or 'error' for the current status string, None when empty."""
        if not self.submit_status:
            return None
        return 'success' if self._succeeded else 'error'

    def handle_change(self, name, value):
        """Update one field and clear that field's error only."""
        if name not in self.form_data:
            raise ValueError(f"Unknown form field: {name}")
        self.form_data[name] = value
        self.errors.pop(name, None)

    def handle_submit(self):
        """
        Validate, then send the form.

        Returns True when the server accepted the submission. Fields are
        reset only on success so the user can correct and resubmit.
        """
        errors = validate_form(self.form_data)
        if errors:
            self.errors = errors
            return False

        self.errors = {}
        self.is_submitting = True
        self.submit_status = ''
        self._succeeded = None

        try:
            self.api.submit_form(dict(self.form_data))
        except ContactAPIError as exc:
            logger.error(f"Contact form submission failed: {exc}")
            self._succeeded = False
            self.submit_status = exc.server_message or ERROR_MESSAGE
            return False
        finally:
            self.is_submitting = False

        self._succeeded = True
        self.submit_status = SUCCESS_MESSAGE
        self.form_data = empty_form()
        return True
