"""Duplicate detection against the catalog and within a single spreadsheet."""

from __future__ import annotations

import re
from collections.abc import Iterable

from app.domain.entities import VehicleIdentity

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_identity_part(value: str | None) -> str:
    """Lowercase, trim and collapse whitespace runs to a single space."""

    if value is None:
        return ""
    return _WHITESPACE_RUN.sub(" ", value.strip()).lower()


def build_identity_key(marca: str | None, modelo: str | None, categoria: str | None) -> str:
    """Business identity of a product: ``marca|modelo|categoria`` normalized."""

    return "|".join(
        normalize_identity_part(part) for part in (marca, modelo, categoria)
    )


class DuplicateResolver:
    """Track catalog identities and keys already accepted in one validation pass.

    An instance must not outlive a single validate call: the catalog snapshot
    is loaded once and the accepted keys grow as rows are admitted.
    """

    def __init__(self, existing: Iterable[VehicleIdentity]) -> None:
        self._existing: dict[str, int] = {}
        for identity in existing:
            key = build_identity_key(identity.marca, identity.modelo, identity.categoria)
            self._existing.setdefault(key, identity.id)
        self._accepted: set[str] = set()

    def find_existing(self, key: str) -> int | None:
        """Return the id of the persisted product with ``key``, if any."""

        return self._existing.get(key)

    def is_repeated(self, key: str) -> bool:
        """Whether an earlier row of the same spreadsheet was accepted with ``key``."""

        return key in self._accepted

    def accept(self, key: str) -> None:
        self._accepted.add(key)


__all__ = ["DuplicateResolver", "build_identity_key", "normalize_identity_part"]
