"""
Customer directory.

Public bookings look customers up by phone so a returning customer is
not created twice; unknown phones get a new record on demand.
"""

import logging
import threading
from typing import Optional

from agenda.schemas.customer_schema import Customer, CustomerInfo
from agenda.utils import normalize_phone

logger = logging.getLogger(__name__)


class CustomerDirectory:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._customers: dict[str, Customer] = {}

    def get(self, customer_id: Optional[str]) -> Optional[Customer]:
        if customer_id is None:
            return None
        return self._customers.get(customer_id)

    def lookup_by_phone(self, business_id: str, phone: str) -> Optional[Customer]:
        """Look up a customer by phone number within a business. Returns None if not found."""
        cleaned = normalize_phone(phone)
        for customer in self._customers.values():
            if customer.business_id == business_id and customer.phone == cleaned:
                logger.debug("Returning customer found: %s", customer.name)
                return customer
        return None

    def create(self, business_id: str, info: CustomerInfo) -> Customer:
        customer = Customer(
            business_id=business_id,
            name=info.name.strip(),
            phone=normalize_phone(info.phone),
            email=info.email or None,
        )
        self._customers[customer.id] = customer
        logger.info("New customer created: %s (%s)", customer.name, customer.phone)
        return customer

    def resolve(self, business_id: str, info: CustomerInfo) -> Customer:
        """Return the existing customer with this phone, creating one if absent."""
        with self._lock:
            existing = self.lookup_by_phone(business_id, info.phone)
            if existing is not None:
                return existing
            return self.create(business_id, info)

    def reset(self) -> None:
        """Clear all customers. Used by test fixtures for isolation."""
        self._customers.clear()
