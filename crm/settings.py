from decouple import Choices, config

BASE_MODULE = 'crm'

# API Documentation
API_TITLE = config('API_TITLE', default='Customer Records API')
API_DESCRIPTION = config('API_DESCRIPTION', default='Customer record management')

HOST = 'http://127.0.0.1'
DEBUG = config('DEBUG', default=False, cast=bool)
ENVIRONMENT = config('ENVIRONMENT', default='local', cast=Choices(['local', 'testing', 'staging', 'production']))
IS_LOCAL = ENVIRONMENT == 'local'
IS_PRODUCTION = ENVIRONMENT == 'production'
IS_STAGING = ENVIRONMENT == 'staging'
IS_TESTING = ENVIRONMENT == 'testing'  # Set in conftest
IS_DEPLOYED_ENV = IS_PRODUCTION or IS_STAGING

BACKEND_CORS_ORIGINS = config(
    'BACKEND_CORS_ORIGINS', default='http://localhost:3000', cast=lambda v: list(v.split(','))
)
CORS_ALLOWED_METHODS = config(
    'CORS_ALLOWED_METHODS', default='GET,POST,PUT,PATCH,DELETE,OPTIONS', cast=lambda v: list(v.split(','))
)
CORS_ALLOWED_HEADERS = config(
    'CORS_ALLOWED_HEADERS',
    default='Accept,Accept-Language,Content-Type,Content-Language,X-Requested-With,X-Request-ID',
    cast=lambda v: list(v.split(',')),
)

API_PREFIX = ''

LOG_LEVEL = config('LOG_LEVEL', 'INFO')

# Database
# MONGODB_URL is accepted for hosts that expose the connection string under that name
DEFAULT_MONGODB_URI = 'mongodb://localhost:27017/crm'
MONGODB_URI = config('MONGODB_URI', default=None) or config('MONGODB_URL', default=None)
# Only used when the connection string does not name a database
MONGODB_DB_NAME = config('MONGODB_DB_NAME', default='crm')
MONGODB_SERVER_SELECTION_TIMEOUT_MS = config('MONGODB_SERVER_SELECTION_TIMEOUT_MS', default=5000, cast=int)

# Customers
CUSTOMER_PAGE_SIZE = config('CUSTOMER_PAGE_SIZE', default=10, cast=int)

# Sentry
SENTRY_DSN = config('SENTRY_DSN', default=None)
SENTRY_DEFAULT_SAMPLE_RATE = config('SENTRY_DEFAULT_SAMPLE_RATE', default=1, cast=int)

# Mocks
USE_MOCK_SENTRY_CLIENT = config('USE_MOCK_SENTRY_CLIENT', default=False, cast=bool)
# In-memory mongomock store, installed with the 'mock' extra (tests, offline local runs)
USE_MOCK_DATABASE_CLIENT = config('USE_MOCK_DATABASE_CLIENT', default=False, cast=bool)

# Packages with a models.py registering collections
BOUNDARIES = [
    'core.customer',
]
