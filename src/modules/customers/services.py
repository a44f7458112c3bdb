"""Customer service layer (Use Cases).

Orchestrates business logic for the Customer aggregate, delegating
persistence to the injected ``ICustomerRepository``.

Business rules enforced here:
- Ids must be present and positive.
- Email is unique among non-deleted customers, ignoring case.
- Phone numbers are validated when the entity is built.
- Soft delete is idempotent: deleting a missing customer is a no-op.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import structlog
from django.db import transaction

from modules.core.validation import require, require_positive_id
from modules.customers.dtos import CustomerOutputDTO
from modules.customers.exceptions import CustomerNotFound, EmailAlreadyRegistered

if TYPE_CHECKING:
    from modules.customers.dtos import CreateCustomerDTO
    from modules.customers.repositories.interfaces import ICustomerRepository

logger = structlog.get_logger(__name__)


class CustomerService:
    """Application service for Customer use-cases.

    Receives an ``ICustomerRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ICustomerRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_customer(self, id: Optional[int]) -> CustomerOutputDTO:
        """Retrieve a single non-deleted customer by ID.

        Raises:
            RequestValidationError: if ``id`` is missing or not positive.
            CustomerNotFound: if no visible customer has this id.
        """
        require_positive_id(id, "Customer id")
        customer = self._repo.find_active_by_id(id)
        if not customer:
            raise CustomerNotFound(f"Customer not found for id: {id}")
        logger.info("customer.retrieved", customer_id=id)
        return CustomerOutputDTO.from_entity(customer)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_customer(self, dto: Optional[CreateCustomerDTO]) -> CustomerOutputDTO:
        """Register a new customer after enforcing email uniqueness.

        Raises:
            RequestValidationError: if ``dto`` is missing.
            EmailAlreadyRegistered: if a visible customer uses the email.
            InvalidPhoneNumber: if the phone does not match the pattern.
            StorageConflict: if the database unique index rejects the row.
        """
        require(dto, "request", "Customer request mustn't be null")
        log = logger.bind(email=dto.email)

        if self._repo.find_active_by_email(dto.email):
            log.warning("customer.duplicate_email")
            raise EmailAlreadyRegistered(
                f"Customer with email: {dto.email} already registered"
            )

        customer = self._repo.save(dto.to_entity())
        log.info("customer.created", customer_id=customer.id)
        return CustomerOutputDTO.from_entity(customer)

    @transaction.atomic
    def soft_delete_customer(self, id: Optional[int]) -> None:
        """Mark a customer as deleted; silently ignore missing customers."""
        require_positive_id(id, "Customer id")
        customer = self._repo.find_active_by_id(id)
        if not customer:
            logger.info("customer.delete_skipped", customer_id=id)
            return
        customer.deleted = True
        self._repo.save(customer)
        logger.info("customer.soft_deleted", customer_id=id)
