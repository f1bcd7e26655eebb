"""Builds the stores, ties them to a JSON gateway and loads the last snapshot.

The CLI gets everything it needs from the ``App`` returned here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from grocer.domain.exceptions import PersistenceError
from grocer.domain.outcome import Outcome
from grocer.domain.repository.persistence_gateway import PersistenceGateway
from grocer.domain.service.sale_ledger import SaleLedger
from grocer.domain.store.client_registry import ClientRegistry
from grocer.domain.store.inventory_store import InventoryStore
from grocer.infrastructure.persistence.json_gateway import JsonGateway
from grocer.infrastructure.persistence.snapshot import DataSnapshot

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "GROCER_DATA_DIR"
LOG_DIR_ENV = "GROCER_LOG_DIR"

# Relative to the working directory, like the store's ./data folder.
DEFAULT_DATA_DIR = Path("data")


@dataclass
class App:
    """Every store of one running process, plus the snapshot that persists them."""

    inventory: InventoryStore
    clients: ClientRegistry
    ledger: SaleLedger
    snapshot: DataSnapshot
    loaded: Outcome[None] = field(default_factory=Outcome.success)

    def save(self) -> Outcome[None]:
        """Persist every store, unless the startup load failed.

        Saving after a failed load would replace the unreadable snapshot
        with the (empty) in-memory state.
        """
        if not self.loaded.ok:
            return Outcome.failure(
                PersistenceError(
                    f"Not saving: saved data could not be loaded ({self.loaded.reason})"
                )
            )
        return self.snapshot.save_all()


def build_app(gateway: PersistenceGateway) -> App:
    inventory = InventoryStore()
    clients = ClientRegistry()
    ledger = SaleLedger(inventory, clients)
    snapshot = DataSnapshot(gateway, inventory, clients, ledger)
    return App(inventory=inventory, clients=clients, ledger=ledger, snapshot=snapshot)


def open_app(data_dir: Path = DEFAULT_DATA_DIR) -> App:
    """Build the stores and load the last snapshot from ``data_dir``.

    Loading is best effort: on failure the stores simply start empty and
    ``App.loaded`` records why.
    """
    app = build_app(JsonGateway(data_dir))
    app.loaded = app.snapshot.load_all()
    if not app.loaded.ok:
        logger.warning("Starting with empty stores: %s", app.loaded.reason)
    return app
