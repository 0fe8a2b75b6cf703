"""
Settings for the test suite: fixed secret key, in-memory SQLite.
"""
import os

os.environ.setdefault('SECRET_KEY', 'test-secret-key-not-for-production')
os.environ.setdefault('DATABASE_URL', 'sqlite://:memory:')
os.environ.setdefault('ENVIRONMENT', 'test')

from .settings import *  # noqa: E402,F401,F403

LOGGING['root']['level'] = 'WARNING'  # noqa: F405
