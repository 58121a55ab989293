from crm.core.customer.constants import CUSTOMER_COLLECTION
from crm.core.customer.domains import CustomerCreate, CustomerRead, CustomerUpdate
from crm.core.customer.models import Customer
from crm.core.customer.service import CustomerService

__all__ = [
    'CUSTOMER_COLLECTION',
    'Customer',
    'CustomerCreate',
    'CustomerRead',
    'CustomerUpdate',
    'CustomerService',
]
