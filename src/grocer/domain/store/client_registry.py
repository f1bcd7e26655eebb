"""Client registry: owns the Client collection and order histories.

Histories are exposed only as tuples; ``append_sale`` is the single
operation allowed to grow one, so no caller ever holds a mutable handle
into the registry's state.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from grocer.domain.exceptions import EntityNotFoundError, ValidationError
from grocer.domain.model.client import Client
from grocer.domain.model.identity import IdSequence
from grocer.domain.model.sale import Sale
from grocer.domain.outcome import Outcome


class ClientRegistry:

    def __init__(self, ids: IdSequence | None = None) -> None:
        self._clients: dict[int, Client] = {}
        self._histories: dict[int, list[Sale]] = {}
        self._ids = ids or IdSequence()

    def next_id(self) -> int:
        return self._ids.next()

    # --- Commands -------------------------------------------------------------

    def add(self, client: Client | None) -> Outcome[Client]:
        if client is None:
            return Outcome.failure(ValidationError("Client cannot be empty"))
        self._clients[client.id] = client
        self._histories.setdefault(client.id, [])
        self._ids.observe(client.id)
        return Outcome.success(client)

    def append_sale(self, client_id: int | None, sale: Sale | None) -> Outcome[None]:
        """Append a committed sale to a client's order history."""
        if sale is None:
            return Outcome.failure(ValidationError("Sale cannot be empty"))
        if client_id is None or client_id not in self._clients:
            return Outcome.failure(EntityNotFoundError(f"Client #{client_id} not found"))
        if sale.client_id != client_id:
            return Outcome.failure(
                ValidationError(
                    f"Sale #{sale.id} was not made for client #{client_id}"
                )
            )
        history = self._histories[client_id]
        if any(s.id == sale.id for s in history):
            return Outcome.failure(
                ValidationError(
                    f"Sale #{sale.id} is already in the history of client #{client_id}"
                )
            )
        history.append(sale)
        return Outcome.success()

    def replace_all(
        self,
        clients: Iterable[Client] | None,
        histories: Mapping[int, Sequence[Sale]] | None = None,
    ) -> Outcome[None]:
        """Clear the registry and reinsert ``clients`` with their histories.

        Histories get the same checks as ``append_sale``: every sale was
        made for that client and appears once.  Nothing changes when a
        check fails.
        """
        if clients is None:
            return Outcome.failure(ValidationError("Client list cannot be empty"))
        items = list(clients)
        if any(c is None for c in items):
            return Outcome.failure(ValidationError("Client list contains an empty entry"))

        by_id = {c.id: c for c in items}
        histories = histories or {}
        unknown = sorted(set(histories) - set(by_id))
        if unknown:
            return Outcome.failure(
                EntityNotFoundError(f"History given for unknown client(s): {unknown}")
            )
        for client_id, history in histories.items():
            seen: set[int] = set()
            for sale in history:
                if sale is None or sale.client_id != client_id:
                    return Outcome.failure(
                        ValidationError(
                            f"History of client #{client_id} holds a sale "
                            f"not made for that client"
                        )
                    )
                if sale.id in seen:
                    return Outcome.failure(
                        ValidationError(
                            f"Sale #{sale.id} appears twice in the history "
                            f"of client #{client_id}"
                        )
                    )
                seen.add(sale.id)

        self._clients = by_id
        self._histories = {cid: list(histories.get(cid, ())) for cid in by_id}
        self._ids.reset(after=max(by_id, default=0))
        return Outcome.success()

    # --- Queries --------------------------------------------------------------

    def find_by_id(self, client_id: int | None) -> Outcome[Client | None]:
        if client_id is None:
            return Outcome.failure(ValidationError("Client ID cannot be empty"))
        return Outcome.success(self._clients.get(client_id))

    def find_by_name(self, name: str | None) -> Outcome[list[Client]]:
        """Case-insensitive substring search on client names."""
        if name is None or not name.strip():
            return Outcome.failure(ValidationError("Client name cannot be empty"))
        needle = name.strip().lower()
        return Outcome.success(
            [c for c in self._clients.values() if needle in c.name.lower()]
        )

    def history_of(self, client_id: int | None) -> Outcome[tuple[Sale, ...]]:
        if client_id is None:
            return Outcome.failure(ValidationError("Client ID cannot be empty"))
        if client_id not in self._clients:
            return Outcome.failure(EntityNotFoundError(f"Client #{client_id} not found"))
        return Outcome.success(tuple(self._histories[client_id]))

    def owner_of(self, sale: Sale) -> Client | None:
        """Return the client whose history contains ``sale``, if any."""
        for client_id, history in self._histories.items():
            if any(s.id == sale.id for s in history):
                return self._clients[client_id]
        return None

    def list_all(self) -> list[Client]:
        return list(self._clients.values())
