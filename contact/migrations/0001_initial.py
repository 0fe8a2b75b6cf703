import django.core.validators
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Contact',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(error_messages={'blank': 'Name is required', 'max_length': 'Name cannot exceed 100 characters', 'null': 'Name is required'}, help_text='Name of the person contacting us', max_length=100, validators=[django.core.validators.MinLengthValidator(2, message='Name must be at least 2 characters long')])),
                ('email', models.CharField(error_messages={'blank': 'Email is required', 'max_length': 'Please enter a valid email address', 'null': 'Email is required'}, help_text='Lowercased email address for follow-up', max_length=254, validators=[django.core.validators.RegexValidator("^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*@(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\\.)+[A-Za-z]{2,63}$", message='Please enter a valid email address')])),
                ('phone', models.CharField(error_messages={'blank': 'Phone number is required', 'max_length': 'Please enter a valid phone number', 'null': 'Phone number is required'}, help_text='Phone number, optional leading +', max_length=17, validators=[django.core.validators.RegexValidator('^\\+?[1-9][0-9]{0,15}$', message='Please enter a valid phone number')])),
                ('message', models.TextField(error_messages={'blank': 'Message is required', 'null': 'Message is required'}, help_text='The message content (10-1000 characters)', validators=[django.core.validators.MinLengthValidator(10, message='Message must be at least 10 characters long'), django.core.validators.MaxLengthValidator(1000, message='Message cannot exceed 1000 characters')])),
                ('status', models.CharField(choices=[('new', 'New'), ('read', 'Read'), ('replied', 'Replied'), ('archived', 'Archived')], db_index=True, default='new', help_text='Current status of the submission', max_length=20)),
                ('ip_address', models.GenericIPAddressField(blank=True, help_text='IP address of the submitter', null=True)),
                ('user_agent', models.TextField(blank=True, help_text='Browser user agent of the submitter', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='When the message was submitted')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='When the record was last updated')),
            ],
            options={
                'verbose_name': 'Contact',
                'verbose_name_plural': 'Contacts',
                'db_table': 'contacts',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['email', '-created_at'], name='contacts_email_created_idx')],
            },
        ),
    ]
