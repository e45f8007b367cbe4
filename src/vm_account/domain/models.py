"""Domain models for vm_account — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Account:
    id: str
    username: str
    role: str            # UserRole value
    balance: int         # cents
    created_at: datetime | None = None
    updated_at: datetime | None = None
