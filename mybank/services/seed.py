import logging

from sqlalchemy.orm import Session

from mybank.models.customer import Customer


logger = logging.getLogger(__name__)

DEMO_CUSTOMERS = [
    {
        "first_name": "Test",
        "last_name": "User",
        "email": "test.user@example.com",
        "personal_id_number": "12345678901",
        "phone_number": "+4711223344",
    },
    {
        "first_name": "Kari",
        "last_name": "Nordmann",
        "email": "kari.nordmann@example.com",
        "personal_id_number": "23456789012",
        "phone_number": "+4722334455",
    },
    {
        "first_name": "Ola",
        "last_name": "Nordmann",
        "email": "ola.nordmann@example.com",
        "personal_id_number": "34567890123",
        "phone_number": "+4733445566",
    },
]


def seed_demo(db: Session) -> int:
    """Insert the demo customers into an empty table. Returns how many were added."""
    if db.query(Customer.id).first() is not None:
        logger.info("Customer table already populated; skipping demo seed")
        return 0

    db.add_all([Customer(**data) for data in DEMO_CUSTOMERS])
    db.commit()
    logger.info("Seeded %s demo customers", len(DEMO_CUSTOMERS))
    return len(DEMO_CUSTOMERS)
