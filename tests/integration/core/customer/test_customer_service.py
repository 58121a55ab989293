import pytest

from crm.common.exceptions import ConflictError, NotFoundError, ValidationError
from crm.core.customer import Customer, CustomerService
from crm.core.customer.constants import CUSTOMER_MEMBER_NUMBER_INDEX


@pytest.fixture
def service() -> CustomerService:
    return CustomerService(page_size=10)


@pytest.fixture
def twenty_five_customers(customer_factory):
    # Inserted shuffled so ordering comes from the query
    numbers = [13, 2, 25, 7, 19, 1, 22, 10, 4, 16, 11, 24, 3, 8, 20, 5, 14, 23, 6, 18, 9, 21, 12, 17, 15]
    for number in numbers:
        Customer.create(customer_factory.build(member_number=number))


class TestCustomerService:
    def test_member_number_index_is_unique(self):
        indexes = Customer.get_collection().index_information()

        assert indexes[CUSTOMER_MEMBER_NUMBER_INDEX]['unique'] is True

    def test_create_and_find(self, service, customer_factory):
        fields = customer_factory.build()

        created = service.create(fields)

        found = service.find_by_id(created.id)
        assert found == created
        assert found.model_dump(exclude={'id'}) == fields.model_dump()

    def test_create_duplicate(self, service, customer, customer_factory):
        with pytest.raises(ConflictError):
            service.create(customer_factory.build(member_number=customer.member_number))

        assert Customer.count() == 1

    def test_find_all_sorted(self, service, twenty_five_customers):
        assert [c.member_number for c in service.find_all()] == list(range(1, 26))

    @pytest.mark.parametrize(
        'page_number, expected',
        [
            (1, list(range(1, 11))),
            ('2', list(range(11, 21))),
            (3, list(range(21, 26))),
            (4, []),
        ],
    )
    def test_paginate(self, service, twenty_five_customers, page_number, expected):
        assert [c.member_number for c in service.paginate(page_number)] == expected

    def test_paginate_custom_page_size(self, service, twenty_five_customers):
        assert [c.member_number for c in service.paginate(2, page_size=4)] == [5, 6, 7, 8]

    @pytest.mark.parametrize('page_number', [0, -3, 'abc', None, ''])
    def test_paginate_rejects(self, service, page_number):
        with pytest.raises(ValidationError):
            service.paginate(page_number)

    def test_search(self, service, customer_factory):
        Customer.create(customer_factory.build(name='Ann', member_number=2, interests='Gardening, ROSES'))
        Customer.create(customer_factory.build(name='Rosalind', member_number=1, interests='crystallography'))
        Customer.create(customer_factory.build(name='Bob', member_number=3, interests='tulips'))

        assert [c.name for c in service.search('rOs')] == ['Rosalind', 'Ann']
        assert service.search('orchids') == []

    def test_update_overwrites_only_provided_fields(self, service, customer):
        updated = service.update(customer.id, name='Renamed')

        assert updated.name == 'Renamed'
        assert updated.interests == customer.interests
        assert updated.member_number == customer.member_number
        assert updated.id == customer.id

    def test_update_without_fields_returns_current(self, service, customer):
        assert service.update(customer.id) == customer

    def test_update_unknown(self, service, customer):
        with pytest.raises(NotFoundError):
            service.update('000000000000000000000000', name='Ghost')

        assert service.find_by_id(customer.id) == customer

    def test_update_missing_id(self, service):
        with pytest.raises(ValidationError):
            service.update(None, name='Ghost')

    def test_update_conflict(self, service, customer, customer_factory):
        other = service.create(customer_factory.build())

        with pytest.raises(ConflictError):
            service.update(other.id, member_number=customer.member_number)

    def test_delete(self, service, customer):
        deleted = service.delete_by_id(customer.id)

        assert deleted == customer
        with pytest.raises(NotFoundError):
            service.find_by_id(customer.id)

    def test_delete_unknown(self, service):
        with pytest.raises(NotFoundError):
            service.delete_by_id('000000000000000000000000')

    def test_find_missing_id(self, service):
        with pytest.raises(ValidationError):
            service.find_by_id('')


class TestResolveListQuery:
    def test_falls_back_to_all(self, service, twenty_five_customers):
        result = service.resolve_list_query({'id': None, 's': None, 'pno': None})

        assert len(result) == 25

    def test_page(self, service, twenty_five_customers):
        result = service.resolve_list_query({'pno': '3'})

        assert [c.member_number for c in result] == list(range(21, 26))

    def test_empty_search_is_ignored(self, service, twenty_five_customers):
        assert len(service.resolve_list_query({'s': ''})) == 25

    def test_empty_search_falls_through_to_page(self, service, twenty_five_customers):
        result = service.resolve_list_query({'s': '', 'pno': '3'})

        assert [c.member_number for c in result] == list(range(21, 26))
