"""
Customer Service - business orchestration for banking customers
Handles existence checks, partial-update merge, soft vs hard delete and
mapping between Customer aggregates and API schemas
"""

import logging
from dataclasses import replace
from typing import List, Optional

from exceptions import (
    CustomerAlreadyExistsError,
    CustomerNotFoundError,
    DuplicateIdentificationError,
    InvalidCustomerDataError,
)
from models.customer import Customer
from repositories.customer_repository import CustomerRepository
from schemas.customer import CreateCustomerRequest, CustomerResponse, UpdateCustomerRequest

from .credentials import hash_credential

logger = logging.getLogger(__name__)


def apply_update(customer: Customer, request: UpdateCustomerRequest) -> Customer:
    """
    Copy the fields present in the request onto a copy of the customer

    Fields left out of the request (or sent as null) keep their current
    value. A new password is hashed before it is stored.
    """
    changes = request.present_fields()
    if "password" in changes:
        changes["password"] = hash_credential(changes["password"])
    return replace(customer, **changes)


class CustomerService:
    """
    Customer business rules on top of the reconciliation repository
    """

    def __init__(self, repository: Optional[CustomerRepository] = None):
        self.repository = repository or CustomerRepository()

    async def create_customer(self, request: CreateCustomerRequest) -> CustomerResponse:
        """
        Register a new customer

        The existence check is only a fast-path rejection: two concurrent
        requests can both pass it, in which case the unique constraint on
        persons.identification rejects the second insert and that is
        reported the same way.
        """
        logger.info(f"Creating new customer with identification: {request.identification}")

        if await self.repository.exists_by_identification(request.identification):
            logger.warning(f"Customer already exists with identification: {request.identification}")
            raise CustomerAlreadyExistsError(
                f"Customer with identification {request.identification} already exists"
            )

        draft = self._to_draft(request)
        try:
            created = await self.repository.create(draft)
        except DuplicateIdentificationError as e:
            logger.warning(f"Concurrent create lost the race for identification: {request.identification}")
            raise CustomerAlreadyExistsError(
                f"Customer with identification {request.identification} already exists"
            ) from e

        logger.info(f"Customer created successfully with ID: {created.id}")
        return self.to_response(created)

    async def find_customer_by_id(self, customer_id: int) -> CustomerResponse:
        customer = await self._get_existing(customer_id)
        return self.to_response(customer)

    async def find_customer_by_identification(self, identification: str) -> CustomerResponse:
        customer = await self.repository.find_by_identification(identification)
        if customer is None:
            raise CustomerNotFoundError(f"Customer not found with identification: {identification}")
        return self.to_response(customer)

    async def find_all_customers(self) -> List[CustomerResponse]:
        customers = await self.repository.find_all()
        return [self.to_response(customer) for customer in customers]

    async def update_customer(self, customer_id: int, request: UpdateCustomerRequest) -> CustomerResponse:
        logger.info(f"Updating customer with ID: {customer_id}")

        existing = await self._get_existing(customer_id)
        merged = apply_update(existing, request)
        if not merged.has_valid_basic_info():
            raise InvalidCustomerDataError("Name and identification cannot be blank")

        updated = await self.repository.update(merged)
        logger.info(f"Customer {customer_id} updated successfully")
        return self.to_response(updated)

    async def delete_customer(self, customer_id: int) -> None:
        """
        Soft delete: deactivate the customer, both records stay in storage
        """
        logger.info(f"Deactivating customer with ID: {customer_id}")

        customer = await self._get_existing(customer_id)
        customer.deactivate()
        await self.repository.update(customer)

        logger.info(f"Customer {customer_id} deactivated successfully")

    async def hard_delete_customer(self, customer_id: int) -> None:
        """
        Hard delete: physically remove the client and person rows (irreversible)
        """
        logger.warning(f"Hard deleting customer with ID: {customer_id}")

        await self._get_existing(customer_id)
        await self.repository.delete_by_id(customer_id)

        logger.info(f"Customer {customer_id} hard deleted successfully")

    async def _get_existing(self, customer_id: int) -> Customer:
        customer = await self.repository.find_by_id(customer_id)
        if customer is None:
            raise CustomerNotFoundError(f"Customer not found with ID: {customer_id}")
        return customer

    def _to_draft(self, request: CreateCustomerRequest) -> Customer:
        draft = Customer(
            name=request.name,
            gender=request.gender,
            identification=request.identification,
            address=request.address,
            phone=request.phone,
            password=hash_credential(request.password),
            status=True,
        )
        # Only reachable for requests built without schema validation
        if not draft.has_valid_basic_info():
            raise InvalidCustomerDataError("Name and identification are required")
        return draft

    @staticmethod
    def to_response(customer: Customer) -> CustomerResponse:
        """Map an aggregate to its API view (credential excluded)"""
        return CustomerResponse(
            id=customer.id,
            name=customer.name,
            gender=customer.gender,
            identification=customer.identification,
            address=customer.address,
            phone=customer.phone,
            status=customer.status,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
        )


# Global service instance
customer_service = CustomerService()
