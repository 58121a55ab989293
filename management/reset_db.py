import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
# ruff: noqa: E402
from crm import settings, setup

setup.run()
from loguru import logger

from crm.network.database.connection import connection_manager, get_connection_uri, redact_uri
from crm.network.database.repository.mixin import ensure_indexes

if settings.IS_PRODUCTION:
    raise Exception('🛑 STOP! 🛑 You likely did not mean to do this on production...')


def main():
    manager = connection_manager()
    database = manager.get_database()
    logger.info(f'Resetting database {database.name} at {redact_uri(get_connection_uri())}...')
    for name in database.list_collection_names():
        logger.info(f'dropping collection: {name}')
        database.drop_collection(name)

    # Collections come back empty with their indexes
    ensure_indexes(manager.get_connection())
    setup.teardown()


if __name__ == '__main__':
    main()
