from dataclasses import dataclass
from typing import Optional


@dataclass
class Customer:
    """Domain model for a stored customer. The id is assigned by the store."""

    id: int
    first_name: str
    last_name: str
    email: str
    phone: str


@dataclass
class CustomerWriteModel:
    """
    Normalized shape submitted to the repository for create and update.

    Decoupled from any request version's wire shape. ``id`` is None for
    customers that have not been persisted yet.
    """

    first_name: str
    last_name: str
    email: str
    phone: str
    id: Optional[int] = None

    def is_new(self) -> bool:
        """Checks if the write model targets a customer not yet stored."""
        return self.id is None
