"""Abstract persistence gateway.

Defined in the domain layer so the domain never depends on
infrastructure.  A gateway stores whole collections as snapshots of
plain records; concrete implementations (JSON files, in-memory) live in
the infrastructure layer and in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class PersistenceGateway(ABC):

    @abstractmethod
    def save(self, collection: str, records: list[dict]) -> None:
        """Write a complete snapshot, replacing any previous one.

        Raises PersistenceError if the snapshot could not be written; the
        previous snapshot then stays in place.
        """

    @abstractmethod
    def save_many(self, snapshots: dict[str, list[dict]]) -> None:
        """Write several collections together, all or none.

        Raises PersistenceError if any snapshot could not be written; every
        previous snapshot then stays in place.
        """

    @abstractmethod
    def load(self, collection: str) -> list[dict]:
        """Return the last saved snapshot.

        Raises CollectionNotFoundError if nothing was ever saved, or
        PersistenceError if the snapshot cannot be read.
        """
