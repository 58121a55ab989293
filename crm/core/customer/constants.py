CUSTOMER_COLLECTION = 'customers'
CUSTOMER_MEMBER_NUMBER_INDEX = 'memberNumber_unique'
