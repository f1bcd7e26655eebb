"""Client entity.

A client is just an identity and a name.  The client's order history
is owned by the ClientRegistry, which is the only place it can grow.
"""

from __future__ import annotations

from dataclasses import dataclass

from grocer.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Client:

    id: int
    name: str

    @staticmethod
    def create(client_id: int, name: str) -> Client:
        if not name or not name.strip():
            raise ValidationError("Client name cannot be empty")
        return Client(id=client_id, name=name.strip())
