import re
from typing import List

from pymongo import ASCENDING

from crm.core.customer.constants import CUSTOMER_COLLECTION, CUSTOMER_MEMBER_NUMBER_INDEX
from crm.core.customer.domains import CustomerCreate, CustomerRead
from crm.network.database.repository.mixin import RepositoryMixin


class Customer(RepositoryMixin[CustomerRead, CustomerCreate]):
    __collection__ = CUSTOMER_COLLECTION
    __create_domain__ = CustomerCreate
    __read_domain__ = CustomerRead
    __indexes__ = [
        {'keys': [('memberNumber', ASCENDING)], 'unique': True, 'name': CUSTOMER_MEMBER_NUMBER_INDEX},
    ]
    default_ordering = [('memberNumber', ASCENDING)]

    @classmethod
    def search(cls, term: str) -> List[CustomerRead]:
        """
        Case insensitive substring match on name or interests
        """
        pattern = {'$regex': re.escape(term), '$options': 'i'}
        return cls.list(filter={'$or': [{'name': pattern}, {'interests': pattern}]})

    @classmethod
    def paginate(cls, page: int, page_size: int) -> List[CustomerRead]:
        return cls.list_page(page=page, page_size=page_size)
