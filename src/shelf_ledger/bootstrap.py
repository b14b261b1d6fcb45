from shelf_ledger.config_schema import Settings
from shelf_ledger.core.logging import configure_logging, get_logger
from shelf_ledger.seed import seed_ledgers
from shelf_ledger.store import InventoryStore

logger = get_logger(__name__)


def create_store(settings: Settings | None = None) -> InventoryStore:
    """
    Builds the process-wide store from settings.

    Configures logging, applies the grid bounds and duplicate policy, and
    seeds the sample catalog when enabled.
    """
    settings = settings or Settings()

    configure_logging(
        settings.app.name,
        settings.logging.level,
        env=settings.app.env,
        json_output=settings.logging.json_output,
    )

    bounds = settings.grid.bounds()
    ledgers = seed_ledgers(bounds) if settings.store.seed_on_startup else []
    store = InventoryStore(
        ledgers,
        bounds=bounds,
        duplicate_policy=settings.imports.duplicate_location_policy,
    )
    if ledgers:
        logger.info("store_seeded", products=len(ledgers))
    return store
