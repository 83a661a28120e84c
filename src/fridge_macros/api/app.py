"""FastAPI application factory."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fridge_macros.api.schemas import (
    LotCreate,
    LotUpdate,
    MealPayload,
    ProductCreate,
    ProductUpdate,
    SettingsUpdate,
    SpeechRequest,
)
from fridge_macros.app_logging import configure_logging
from fridge_macros.containers import AppContainer
from fridge_macros.services.expiration import get_expiration_status


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        try:
            state_container.user_settings_service.ensure_defaults()
            if state_container.settings.seed_default_products:
                state_container.catalog_service.seed_defaults()
        except Exception:
            logger.exception("Failed to prepare default settings and products")
        state_container.rollover_service.run_cleanup()
        rollover_task = asyncio.create_task(
            state_container.rollover_service.run_forever()
        )
        yield
        rollover_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await rollover_task

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(LookupError)
    async def not_found(_request: Request, exc: LookupError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/settings")
    async def get_settings(request: Request) -> dict[str, object]:
        """Return the daily targets."""
        state_container: AppContainer = request.app.state.container
        return {"settings": state_container.user_settings_service.get()}

    @app.patch("/settings")
    async def update_settings(
        payload: SettingsUpdate, request: Request
    ) -> dict[str, object]:
        """Update some of the daily targets."""
        state_container: AppContainer = request.app.state.container
        updated = state_container.user_settings_service.update(
            payload.model_dump(exclude_none=True)
        )
        return {"settings": updated}

    @app.get("/products")
    async def list_products(
        request: Request, query: str | None = None, limit: int = 50
    ) -> dict[str, object]:
        """Return catalog products, fuzzy-ranked when a query is given."""
        state_container: AppContainer = request.app.state.container
        return {"products": state_container.catalog_service.search(query, limit)}

    @app.post("/products", status_code=status.HTTP_201_CREATED)
    async def create_product(
        payload: ProductCreate, request: Request
    ) -> dict[str, object]:
        """Add a product to the catalog."""
        state_container: AppContainer = request.app.state.container
        product = state_container.catalog_service.create_product(payload.model_dump())
        return {"product": product}

    @app.patch("/products/{product_id}")
    async def update_product(
        product_id: UUID, payload: ProductUpdate, request: Request
    ) -> dict[str, object]:
        """Update a catalog product."""
        state_container: AppContainer = request.app.state.container
        product = state_container.catalog_service.update_product(
            product_id, payload.model_dump(exclude_none=True)
        )
        return {"product": product}

    @app.delete("/products/{product_id}")
    async def delete_product(product_id: UUID, request: Request) -> dict[str, str]:
        """Remove a catalog product."""
        state_container: AppContainer = request.app.state.container
        state_container.catalog_service.delete_product(product_id)
        return {"status": "ok"}

    @app.get("/inventory")
    async def list_inventory(request: Request) -> dict[str, object]:
        """Return every lot with its expiration status."""
        state_container: AppContainer = request.app.state.container
        today = state_container.planner_service.today()
        return {
            "lots": [
                {
                    "lot": lot,
                    "expiration_status": get_expiration_status(
                        lot.expiration_date, today
                    ),
                }
                for lot in state_container.inventory_service.list_lots()
            ]
        }

    @app.post("/inventory", status_code=status.HTTP_201_CREATED)
    async def add_lot(payload: LotCreate, request: Request) -> dict[str, object]:
        """Add a lot to inventory."""
        state_container: AppContainer = request.app.state.container
        lot = state_container.inventory_service.add_lot(
            product_id=payload.product_id,
            quantity=payload.quantity,
            unit=payload.unit,
            storage_location=payload.storage_location,
            expiration_date=payload.expiration_date,
        )
        return {"lot": lot}

    @app.patch("/inventory/{lot_id}")
    async def update_lot(
        lot_id: UUID, payload: LotUpdate, request: Request
    ) -> dict[str, object]:
        """Edit a lot."""
        state_container: AppContainer = request.app.state.container
        lot = state_container.inventory_service.update_lot(
            lot_id, payload.model_dump(exclude_none=True)
        )
        return {"lot": lot}

    @app.delete("/inventory/{lot_id}")
    async def remove_lot(lot_id: UUID, request: Request) -> dict[str, str]:
        """Delete a lot."""
        state_container: AppContainer = request.app.state.container
        state_container.inventory_service.remove_lot(lot_id)
        return {"status": "ok"}

    @app.get("/today")
    async def today(request: Request) -> dict[str, object]:
        """Return today's progress and logged meals."""
        state_container: AppContainer = request.app.state.container
        overview = state_container.planner_service.today_overview()
        return {
            "overview": overview,
            "meals": state_container.meal_service.list_meals(overview.day),
        }

    @app.get("/meals")
    async def list_meals(request: Request) -> dict[str, object]:
        """Return meals logged today."""
        state_container: AppContainer = request.app.state.container
        day = state_container.planner_service.today()
        return {"meals": state_container.meal_service.list_meals(day)}

    @app.get("/meals/suggestions")
    async def suggestions(request: Request) -> dict[str, object]:
        """Return the best meals for the rest of today."""
        state_container: AppContainer = request.app.state.container
        return {"candidates": state_container.planner_service.suggest_meals()}

    @app.post("/meals/accept", status_code=status.HTTP_201_CREATED)
    async def accept_meal(payload: MealPayload, request: Request) -> dict[str, object]:
        """Log a meal from inventory, deducting what it uses."""
        state_container: AppContainer = request.app.state.container
        meal = state_container.planner_service.accept_meal(
            [item.to_domain() for item in payload.items]
        )
        return {"meal": meal}

    @app.post("/meals/manual", status_code=status.HTTP_201_CREATED)
    async def log_manual_meal(
        payload: MealPayload, request: Request
    ) -> dict[str, object]:
        """Log a meal without touching inventory."""
        state_container: AppContainer = request.app.state.container
        meal = state_container.meal_service.log_manual(
            [item.to_domain() for item in payload.items],
            state_container.planner_service.today(),
        )
        return {"meal": meal}

    @app.delete("/meals/{meal_id}")
    async def delete_meal(meal_id: UUID, request: Request) -> dict[str, str]:
        """Delete a meal and restore its inventory."""
        state_container: AppContainer = request.app.state.container
        state_container.meal_service.delete_meal(meal_id)
        return {"status": "ok"}

    @app.get("/forecast")
    async def forecast(request: Request) -> dict[str, object]:
        """Return tomorrow's forecast and shopping advice."""
        state_container: AppContainer = request.app.state.container
        return {"forecast": state_container.planner_service.forecast()}

    @app.post("/speech/parse")
    async def parse_speech(
        payload: SpeechRequest, request: Request
    ) -> dict[str, object]:
        """Recognize meal items in a transcribed utterance."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.planner_service.parse_speech(
            payload.text, payload.language
        )
        return {"entries": entries}

    return app
