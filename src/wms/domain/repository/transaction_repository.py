"""Abstract repository for the append-only transaction log."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.transaction import Transaction


class TransactionRepository(ABC):

    @abstractmethod
    def append_all(self, entries: list[Transaction]) -> list[Transaction]:
        """Store new entries in one write and return them with assigned IDs.

        Either every entry is stored or none is.  Entries are never updated
        or deleted.
        """

    @abstractmethod
    def list_all(self) -> list[Transaction]:
        """Return every entry in insertion order."""

    def append(self, entry: Transaction) -> Transaction:
        return self.append_all([entry])[0]
