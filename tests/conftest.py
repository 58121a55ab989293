import os
import sys

# Test Environment Overrides will override .env files
# THESE MUST BE SET BEFORE ANYTHING FROM crm IS IMPORTED
EXPECTED_MONGODB_URI = 'mongodb://localhost:27017/crm-test'
os.environ.setdefault('ENVIRONMENT', 'testing')
os.environ.setdefault('MONGODB_URI', EXPECTED_MONGODB_URI)
os.environ.setdefault('USE_MOCK_DATABASE_CLIENT', 'True')
os.environ.setdefault('USE_MOCK_SENTRY_CLIENT', 'True')
os.environ.setdefault('LOG_LEVEL', 'DEBUG')

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from crm import setup

setup.run()

# ruff: noqa: E402
import pytest

from crm import settings
from crm.core.customer import Customer

pytest_plugins = [
    'tests.factories.customer',
]

# When crm modules are imported before the above patching, tests will use
# a real database as well as a live sentry client.
if settings.MONGODB_URI != EXPECTED_MONGODB_URI or not settings.USE_MOCK_DATABASE_CLIENT:
    raise ValueError(
        'Patching of environment variables failed.\n'
        'This will cause unexpected test failures. '
        'Check all crm imports are delayed until after patching.\n'
    )


@pytest.fixture(scope='function', autouse=True)
def db():
    """
    Every test starts from an empty collection. Indexes survive.
    """
    Customer.delete_all()
    yield
    Customer.delete_all()


@pytest.fixture(scope='function')
def customer(customer_factory):
    """
    Creates a test customer.
    """
    return Customer.create(customer_factory.build())
