"""Domain entity representing a user role."""

from dataclasses import dataclass


@dataclass
class Role:
    """A role that can be assigned to a back-office user."""

    id: int
    name: str
    alias: str


__all__ = ["Role"]
