from unittest.mock import patch

import pytest


@pytest.fixture(scope='function', autouse=True)
def db():
    """
    Nothing to clean up when nothing is stored
    """
    yield


@pytest.fixture(autouse=True)
def no_db_access():
    """
    Unit tests should not be able to reach the document store
    """

    with patch(
        'crm.network.database.repository.mixin.get_database',
        side_effect=Exception('🛑 Database access attempted! 🛑\n Not permitted during unit tests!'),
    ):
        yield
