from datetime import datetime
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, constr
from sqlalchemy.orm import Session

from mybank.core.database import get_db
from mybank.core.serialization_helpers import to_utc_offset
from mybank.models.customer import Customer
from mybank.services import customer_service


logger = logging.getLogger(__name__)

router = APIRouter()

RequiredText = constr(strip_whitespace=True, min_length=1, max_length=255)


class CustomerRequest(BaseModel):
    first_name: RequiredText
    last_name: RequiredText
    email: RequiredText
    personal_id_number: constr(strip_whitespace=True, min_length=1, max_length=64)
    phone_number: constr(strip_whitespace=True, min_length=1, max_length=50)

    def to_entity(self) -> Customer:
        return Customer(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            personal_id_number=self.personal_id_number,
            phone_number=self.phone_number,
        )


class CustomerOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    personal_id_number: str
    phone_number: str
    created: datetime
    updated: datetime

    @classmethod
    def from_entity(cls, customer: Customer) -> "CustomerOut":
        return cls(
            id=customer.id,
            first_name=customer.first_name,
            last_name=customer.last_name,
            email=customer.email,
            personal_id_number=customer.personal_id_number,
            phone_number=customer.phone_number,
            created=to_utc_offset(customer.created),
            updated=to_utc_offset(customer.updated),
        )


@router.get("", response_model=List[CustomerOut])
def get_all_customers(
    email: Optional[str] = Query(None, description="Exact email lookup"),
    personal_id_number: Optional[str] = Query(None, description="Exact personal ID number lookup"),
    db: Session = Depends(get_db),
):
    logger.debug("Getting customers email=%s pid_filter=%s", email, personal_id_number is not None)
    if email is None and personal_id_number is None:
        return [CustomerOut.from_entity(c) for c in customer_service.list_customers(db)]

    matches = []
    if email is not None:
        found = customer_service.find_by_email(db, email)
        if found is not None:
            matches.append(found)
    if personal_id_number is not None:
        found = customer_service.find_by_personal_id_number(db, personal_id_number)
        if email is not None:
            # Both filters given: only a customer matching both qualifies
            matches = [c for c in matches if found is not None and c.id == found.id]
        elif found is not None:
            matches.append(found)
    return [CustomerOut.from_entity(c) for c in matches]


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer_by_id(customer_id: int, db: Session = Depends(get_db)):
    customer = customer_service.get_customer(db, customer_id)
    return CustomerOut.from_entity(customer)


@router.post("", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
def create_customer(data: CustomerRequest, db: Session = Depends(get_db)):
    saved = customer_service.create_customer(db, data.to_entity())
    return CustomerOut.from_entity(saved)


@router.put("/{customer_id}", response_model=CustomerOut)
def update_customer(customer_id: int, data: CustomerRequest, db: Session = Depends(get_db)):
    updated = customer_service.update_customer(db, customer_id, data.to_entity())
    return CustomerOut.from_entity(updated)


@router.delete(
    "/{customer_id}",
    responses={
        status.HTTP_501_NOT_IMPLEMENTED: {"description": "Deleting customers is not supported"},
    },
)
def delete_customer(customer_id: int, db: Session = Depends(get_db)):
    customer_service.delete_customer(db, customer_id)
