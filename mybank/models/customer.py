from sqlalchemy import BigInteger, Column, DateTime, Integer, Sequence, String, UniqueConstraint
from sqlalchemy.orm import declarative_base

from mybank.core.serialization_helpers import utcnow


Base = declarative_base()

customer_id_seq = Sequence("customer_id_seq", start=1, increment=1)
# Largest value a BIGINT id column can hold
MAX_CUSTOMER_ID = 2**63 - 1


class Customer(Base):
    __tablename__ = "customer"
    __table_args__ = (
        UniqueConstraint("email", name="uq_customer_email"),
        UniqueConstraint("personal_id_number", name="uq_customer_personal_id_number"),
    )

    # SQLite only autoincrements INTEGER primary keys
    id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        customer_id_seq,
        primary_key=True,
    )
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    personal_id_number = Column(String(64), nullable=False)
    phone_number = Column(String(50), nullable=False)
    created = Column(DateTime, nullable=False, default=utcnow)
    updated = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<Customer id={self.id} email={self.email!r}>"
