from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Union

from loguru import logger

from crm import settings
from crm.common.exceptions import ConflictError, NotFoundError, ValidationError
from crm.core.customer.domains import CustomerCreate, CustomerRead
from crm.core.customer.models import Customer
from crm.network.database.repository.exceptions import RepositoryIntegrityError, RepositoryObjectNotFound

CUSTOMER_NOT_FOUND = 'Customer not found'
MISSING_CUSTOMER_ID = 'Missing customer id'
DUPLICATE_MEMBER_NUMBER = 'Member number already exists'
MAX_SKIP = 2**63 - 1

ListQueryResult = Union[CustomerRead, List[CustomerRead]]


def parse_page_number(value: Any) -> int:
    """
    Pages start at 1. Anything else is rejected rather than defaulted.
    """
    if isinstance(value, bool):
        raise ValidationError(f'Invalid page number: {value!r}')
    if isinstance(value, int):
        page_number = value
    else:
        try:
            page_number = int(str(value).strip())
        except (TypeError, ValueError):
            raise ValidationError(f'Invalid page number: {value!r}')

    if page_number < 1:
        raise ValidationError(f'Invalid page number: {value!r}')
    return page_number


class CustomerService:
    def __init__(self, page_size: int = 10) -> None:
        self.page_size = page_size

    @classmethod
    def factory(cls) -> 'CustomerService':
        return cls(page_size=settings.CUSTOMER_PAGE_SIZE)

    def find_by_id(self, customer_id: Optional[str]) -> CustomerRead:
        if not customer_id:
            raise ValidationError(MISSING_CUSTOMER_ID)
        try:
            return Customer.get(customer_id)
        except RepositoryObjectNotFound:
            raise NotFoundError(CUSTOMER_NOT_FOUND)

    def find_all(self) -> List[CustomerRead]:
        """All customers by member number"""
        return Customer.list()

    def search(self, term: str) -> List[CustomerRead]:
        return Customer.search(term)

    def paginate(self, page_number: Any, page_size: Optional[int] = None) -> List[CustomerRead]:
        page = parse_page_number(page_number)
        page_size = page_size or self.page_size
        # The store takes skip as a signed 64 bit integer
        if (page - 1) * page_size > MAX_SKIP:
            raise ValidationError(f'Invalid page number: {page_number!r}')
        return Customer.paginate(page=page, page_size=page_size)

    def create(self, customer: CustomerCreate) -> CustomerRead:
        try:
            created = Customer.create(customer)
        except RepositoryIntegrityError:
            raise ConflictError(DUPLICATE_MEMBER_NUMBER)
        logger.info(f'created customer {created.id} (member number {created.member_number})')
        return created

    def update(self, customer_id: Optional[str], **fields: Any) -> CustomerRead:
        if not customer_id:
            raise ValidationError(MISSING_CUSTOMER_ID)
        try:
            updated = Customer.update(customer_id, **fields)
        except RepositoryObjectNotFound:
            raise NotFoundError(CUSTOMER_NOT_FOUND)
        except RepositoryIntegrityError:
            raise ConflictError(DUPLICATE_MEMBER_NUMBER)
        logger.info(f'updated customer {customer_id}: {sorted(fields)}')
        return updated

    def delete_by_id(self, customer_id: Optional[str]) -> CustomerRead:
        if not customer_id:
            raise ValidationError(MISSING_CUSTOMER_ID)
        try:
            deleted = Customer.delete(customer_id)
        except RepositoryObjectNotFound:
            raise NotFoundError(CUSTOMER_NOT_FOUND)
        logger.info(f'deleted customer {customer_id}')
        return deleted

    def resolve_list_query(self, params: Mapping[str, Optional[str]]) -> ListQueryResult:
        """
        First matcher whose parameter is present wins, otherwise everything
        """
        for matcher in LIST_QUERY_MATCHERS:
            if matcher.applies(params):
                return matcher.resolve(self, params[matcher.param])
        return self.find_all()


@dataclass(frozen=True)
class ListQueryMatcher:
    param: str
    resolve: Callable[[CustomerService, str], ListQueryResult]
    # An empty value counts as not sent
    empty_is_absent: bool = False

    def applies(self, params: Mapping[str, Optional[str]]) -> bool:
        value = params.get(self.param)
        if value is None:
            return False
        return not (self.empty_is_absent and value == '')


# Evaluated in order: exact id, then free text search, then pagination
LIST_QUERY_MATCHERS = (
    ListQueryMatcher('id', CustomerService.find_by_id),
    ListQueryMatcher('s', CustomerService.search, empty_is_absent=True),
    ListQueryMatcher('pno', CustomerService.paginate),
)
