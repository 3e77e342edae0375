from .customer import Base, Customer

__all__ = ["Base", "Customer"]
