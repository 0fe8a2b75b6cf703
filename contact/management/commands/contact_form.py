"""
Contact Form Management Command

Fill in and submit the contact form from a terminal against a running API:

    python manage.py contact_form --api-url http://localhost:8000/api
    python manage.py contact_form --name Al --email a@b.com \
        --phone +15551234567 --message "Hello there, need help" --no-input
"""

from django.core.management.base import BaseCommand, CommandError

from contact_client.api import ContactAPI
from contact_client.form import ContactForm
from contact_client.validation import FIELDS

PROMPTS = {
    'name': 'Name *',
    'email': 'Email *',
    'phone': 'Phone *',
    'message': 'Message *',
}


class Command(BaseCommand):
    help = 'Fill in and submit the contact form against the contact API'

    def add_arguments(self, parser):
        parser.add_argument('--api-url', help='API base URL (default: CONTACT_API_URL)')
        for field in FIELDS:
            parser.add_argument(f'--{field}', help=f'Value for the {field} field')
        parser.add_argument(
            '--no-input',
            action='store_true',
            help='Do not prompt; fail if the given values are invalid',
        )

    def handle(self, *args, **options):
        form = ContactForm(ContactAPI(base_url=options['api_url']))
        interactive = not options['no_input']

        for field in FIELDS:
            value = options.get(field)
            if value is None and interactive:
                value = self.prompt(field)
            form.handle_change(field, value or '')

        while True:
            self.stdout.write(f'[{form.submit_label}]')
            submitted = form.handle_submit()

            if submitted:
                self.stdout.write(self.style.SUCCESS(f'✓ {form.submit_status}'))
                return

            if form.errors:
                self.show_errors(form)
                if not interactive:
                    raise CommandError('Contact form has invalid fields')
                for field in list(form.errors):
                    form.handle_change(field, self.prompt(field))
                continue

            raise CommandError(form.submit_status)

    def prompt(self, field):
        try:
            return input(f'{PROMPTS[field]}: ')
        except EOFError:
            raise CommandError('Input closed before the form was complete')

    def show_errors(self, form):
        for field in FIELDS:
            if field in form.errors:
                self.stdout.write(self.style.ERROR(f'  {field}: {form.errors[field]}'))
