#!/usr/bin/env python3
"""Seed the database with sample customers for local UI work."""

import os
import sys
from datetime import date

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from crm import setup  # noqa: E402

setup.run()

from loguru import logger  # noqa: E402

from crm.common.exceptions import ConflictError  # noqa: E402
from crm.core.customer import CustomerCreate, CustomerService  # noqa: E402

CUSTOMERS = [
    {'name': 'Alex Chen', 'date_of_birth': date(1988, 3, 14), 'member_number': 1001, 'interests': 'cycling, chess'},
    {'name': 'Sarah Johnson', 'date_of_birth': date(1992, 7, 2), 'member_number': 1002, 'interests': 'running, jazz'},
    {'name': 'Marcus Williams', 'date_of_birth': date(1979, 11, 23), 'member_number': 1003, 'interests': 'golf'},
    {'name': 'Emily Rodriguez', 'date_of_birth': date(1995, 1, 30), 'member_number': 1004, 'interests': 'yoga, baking'},
    {'name': 'David Kim', 'date_of_birth': date(1984, 5, 9), 'member_number': 1005, 'interests': 'photography'},
    {'name': 'Jessica Taylor', 'date_of_birth': date(1990, 9, 17), 'member_number': 1006, 'interests': 'hiking, birding'},
    {'name': 'Michael Brown', 'date_of_birth': date(1975, 12, 1), 'member_number': 1007, 'interests': 'woodworking'},
    {'name': 'Amanda Garcia', 'date_of_birth': date(1998, 4, 25), 'member_number': 1008, 'interests': 'tennis, chess'},
    {'name': 'Chris Martinez', 'date_of_birth': date(1986, 8, 12), 'member_number': 1009, 'interests': 'swimming'},
    {'name': 'Nicole Anderson', 'date_of_birth': date(1993, 6, 6), 'member_number': 1010, 'interests': 'painting, jazz'},
    {'name': 'Ryan Thomas', 'date_of_birth': date(1981, 2, 19), 'member_number': 1011, 'interests': 'climbing'},
    {'name': 'Lauren Davis', 'date_of_birth': date(1996, 10, 28), 'member_number': 1012, 'interests': 'gardening'},
]


def seed_data() -> int:
    """Insert the sample customers, skipping member numbers already taken."""
    service = CustomerService.factory()
    created = 0
    for fields in CUSTOMERS:
        try:
            service.create(CustomerCreate(**fields))
        except ConflictError:
            logger.info(f"member number {fields['member_number']} exists, skipping")
            continue
        created += 1
    return created


if __name__ == '__main__':
    count = seed_data()
    logger.info(f'seeded {count} customers')
    setup.teardown()
