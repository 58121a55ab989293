from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, status

from crm.core.customer.domains import CustomerCreate, CustomerRead, CustomerUpdate
from crm.core.customer.service import CustomerService

router = APIRouter()


@router.get('', response_model=Union[CustomerRead, List[CustomerRead]])
def get_customers(
    customer_id: Optional[str] = Query(None, alias='id'),
    s: Optional[str] = Query(None, description='Substring of name or interests'),
    pno: Optional[str] = Query(None, description='1 indexed page number'),
    customer_service: CustomerService = Depends(CustomerService.factory),
) -> Union[CustomerRead, List[CustomerRead]]:
    """
    One customer by id, a search, a page or everyone (in that order of precedence)
    """
    return customer_service.resolve_list_query({'id': customer_id, 's': s, 'pno': pno})


@router.get('/{customer_id}', response_model=CustomerRead)
def get_customer(
    customer_id: str,
    customer_service: CustomerService = Depends(CustomerService.factory),
) -> CustomerRead:
    return customer_service.find_by_id(customer_id)


@router.post('', response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
def create_customer(
    customer: CustomerCreate,
    customer_service: CustomerService = Depends(CustomerService.factory),
) -> CustomerRead:
    return customer_service.create(customer)


@router.put('', response_model=CustomerRead)
def replace_customer(
    customer: CustomerUpdate,
    customer_service: CustomerService = Depends(CustomerService.factory),
) -> CustomerRead:
    return customer_service.update(customer.id, **customer.get_update_fields())


@router.patch('', response_model=CustomerRead)
def update_customer(
    customer: CustomerUpdate,
    customer_service: CustomerService = Depends(CustomerService.factory),
) -> CustomerRead:
    return customer_service.update(customer.id, **customer.get_update_fields())


@router.delete('', response_model=CustomerRead)
def delete_customer_by_query(
    customer_id: Optional[str] = Query(None, alias='id'),
    customer_service: CustomerService = Depends(CustomerService.factory),
) -> CustomerRead:
    return customer_service.delete_by_id(customer_id)


@router.delete('/{customer_id}', response_model=CustomerRead)
def delete_customer(
    customer_id: str,
    customer_service: CustomerService = Depends(CustomerService.factory),
) -> CustomerRead:
    return customer_service.delete_by_id(customer_id)
