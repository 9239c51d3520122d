"""Controller Dependency - process-wide RouletteController for route handlers.

Invariants:
    - Exactly one controller per process (single browsing session, no multi-user state)
    - init_controller() is called by the lifespan before any request is served
"""

from splaroulette.services.roulette_controller import RouletteController

# Singleton (initialized on startup)
controller: RouletteController | None = None


def init_controller(instance: RouletteController) -> None:
    global controller
    controller = instance


async def get_controller() -> RouletteController:
    """FastAPI dependency for the application controller."""
    if not controller:
        raise RuntimeError("Controller not initialized")
    return controller
