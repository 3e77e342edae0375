from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mybank.core.errors import (
    CustomerConflictError,
    CustomerNotFoundError,
    CustomerValidationError,
    DuplicateEmailError,
    DuplicatePersonalIdNumberError,
    OperationNotSupportedError,
)
from mybank.core.serialization_helpers import utcnow
from mybank.models.customer import MAX_CUSTOMER_ID, Customer


logger = logging.getLogger(__name__)


def find_customer(db: Session, customer_id: int) -> Optional[Customer]:
    logger.debug("Finding customer by id: %s", customer_id)
    # Ids outside the sequence range were never assigned
    if not 1 <= customer_id <= MAX_CUSTOMER_ID:
        return None
    return db.get(Customer, customer_id)


def get_customer(db: Session, customer_id: int) -> Customer:
    customer = find_customer(db, customer_id)
    if customer is None:
        raise CustomerNotFoundError(f"Customer not found with id: {customer_id}")
    return customer


def find_by_email(db: Session, email: str) -> Optional[Customer]:
    logger.debug("Finding customer by email: %s", email)
    return db.query(Customer).filter(Customer.email == email).first()


def find_by_personal_id_number(db: Session, personal_id_number: str) -> Optional[Customer]:
    logger.debug("Finding customer by personal ID number")
    return (
        db.query(Customer)
        .filter(Customer.personal_id_number == personal_id_number)
        .first()
    )


def list_customers(db: Session) -> List[Customer]:
    logger.debug("Finding all customers")
    return db.query(Customer).order_by(Customer.id).all()


def validate_unique_fields(
    db: Session,
    email: str,
    personal_id_number: str,
    customer_id: Optional[int] = None,
) -> None:
    """
    Reject an email or personal ID number already held by a different customer.
    Email is checked first; `customer_id` is the candidate's own id (None when new).
    """
    existing = find_by_email(db, email)
    if existing is not None and existing.id != customer_id:
        raise DuplicateEmailError(f"Email already exists: {email}")

    existing = find_by_personal_id_number(db, personal_id_number)
    if existing is not None and existing.id != customer_id:
        raise DuplicatePersonalIdNumberError(
            f"Personal ID number already exists: {personal_id_number}"
        )


def _commit(db: Session, customer: Customer) -> Customer:
    # The unique constraints are the final guard against concurrent writers
    # that both passed validate_unique_fields.
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Unique constraint rejected customer write: %s", e.orig)
        raise CustomerConflictError(
            "A constraint violation occurred. This could be due to duplicate unique fields."
        ) from e
    db.refresh(customer)
    return customer


def create_customer(db: Session, candidate: Customer) -> Customer:
    if candidate.id is not None:
        raise CustomerValidationError("A new customer must not carry an id")
    logger.debug("Creating new customer: %r", candidate)

    validate_unique_fields(db, candidate.email, candidate.personal_id_number)

    db.add(candidate)
    saved = _commit(db, candidate)
    logger.info("Created customer with id: %s", saved.id)
    return saved


def update_customer(db: Session, customer_id: int, replacement: Customer) -> Customer:
    """
    Overwrite every mutable field of an existing customer.
    The id and created timestamp are kept; updated is refreshed.
    """
    logger.debug("Updating customer with id: %s", customer_id)

    existing = find_customer(db, customer_id)
    if existing is None:
        raise CustomerValidationError(f"Customer not found with id: {customer_id}")

    if (
        replacement.email != existing.email
        or replacement.personal_id_number != existing.personal_id_number
    ):
        validate_unique_fields(
            db, replacement.email, replacement.personal_id_number, customer_id=existing.id
        )

    existing.first_name = replacement.first_name
    existing.last_name = replacement.last_name
    existing.email = replacement.email
    existing.personal_id_number = replacement.personal_id_number
    existing.phone_number = replacement.phone_number
    existing.updated = utcnow()

    updated = _commit(db, existing)
    logger.info("Updated customer with id: %s", updated.id)
    return updated


def delete_customer(db: Session, customer_id: int) -> None:
    logger.debug("Rejecting delete of customer with id: %s", customer_id)
    raise OperationNotSupportedError("Operation not currently implemented")
