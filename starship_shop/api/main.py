"""
FastAPI application - HTTP boundary for the shop UI

Run locally:
  uvicorn starship_shop.api.main:app --host 127.0.0.1 --port 8000
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from starship_shop.dependencies import build_state_manager
from starship_shop.integrations.contracts.interfaces import PaymentMethod
from starship_shop.shop.state_manager import ShopStateManager

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class AddItemRequest(BaseModel):
    item_id: str = Field(min_length=1)


class SetQuantityRequest(BaseModel):
    quantity: int


class PlaceOrderRequest(BaseModel):
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD


def create_app(state_manager: Optional[ShopStateManager] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        shop = state_manager or build_state_manager()
        app.state.shop = shop
        if not shop.credits.loaded:
            await shop.start()
        yield

    app = FastAPI(
        title="Starship Shop API",
        description="Catalog browsing, session cart and reward credits",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_shop(request: Request) -> ShopStateManager:
        return request.app.state.shop

    @app.get("/health")
    async def health(request: Request) -> Dict[str, Any]:
        shop = get_shop(request)
        return {"status": "ok", "storage": shop.credits.storage.ping()}

    @app.get("/api/v1/state")
    async def get_state(request: Request) -> Dict[str, Any]:
        return get_shop(request).snapshot()

    # ------------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------------

    @app.get("/api/v1/catalog")
    async def get_catalog(request: Request, page: int = Query(default=1, ge=1)) -> Dict[str, Any]:
        shop = get_shop(request)
        if not await shop.fetch_page(page):
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=shop.catalog.error["message"])
        return shop.snapshot()["catalog"]

    @app.get("/api/v1/catalog/search")
    async def search_catalog(request: Request, q: str = Query(default="")) -> Dict[str, Any]:
        shop = get_shop(request)
        accepted = await shop.search(q)
        if accepted and shop.catalog.search_error:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=shop.catalog.search_error["message"])
        return {"accepted": accepted, **shop.snapshot()["search"]}

    # ------------------------------------------------------------------------
    # Cart
    # ------------------------------------------------------------------------

    @app.get("/api/v1/cart")
    async def get_cart(request: Request) -> Dict[str, Any]:
        return get_shop(request).cart_snapshot()

    @app.post("/api/v1/cart/items")
    async def add_cart_item(request: Request, body: AddItemRequest) -> Dict[str, Any]:
        shop = get_shop(request)
        try:
            accepted = shop.add_to_cart(body.item_id)
        except KeyError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown item '{body.item_id}'")
        if not accepted and shop.cart_error:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=shop.cart_error["message"])
        return {"accepted": accepted, "cart": shop.cart_snapshot()}

    @app.delete("/api/v1/cart/items/{item_id}")
    async def remove_cart_item(request: Request, item_id: str) -> Dict[str, Any]:
        shop = get_shop(request)
        accepted = shop.remove_from_cart(item_id)
        return {"accepted": accepted, "cart": shop.cart_snapshot()}

    @app.put("/api/v1/cart/items/{item_id}")
    async def set_cart_item_quantity(request: Request, item_id: str, body: SetQuantityRequest) -> Dict[str, Any]:
        shop = get_shop(request)
        accepted = shop.set_quantity(item_id, body.quantity)
        return {"accepted": accepted, "cart": shop.cart_snapshot()}

    @app.delete("/api/v1/cart")
    async def clear_cart(request: Request) -> Dict[str, Any]:
        shop = get_shop(request)
        shop.clear_cart()
        return shop.cart_snapshot()

    @app.get("/api/v1/cart/summary")
    async def get_cart_summary(request: Request) -> Dict[str, Any]:
        return get_shop(request).summary_snapshot()

    # ------------------------------------------------------------------------
    # Orders & credits
    # ------------------------------------------------------------------------

    @app.post("/api/v1/orders")
    async def place_order(request: Request, body: Optional[PlaceOrderRequest] = None) -> Dict[str, Any]:
        shop = get_shop(request)
        body = body or PlaceOrderRequest()
        receipt = await shop.place_order(payment_method=body.payment_method)
        if receipt is None:
            if shop.checkout_error:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=shop.checkout_error["message"])
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="An order is already being placed")
        return {"receipt": shop.receipt_view(receipt), "credits": shop.credits_snapshot()}

    @app.get("/api/v1/credits")
    async def get_credits(request: Request) -> Dict[str, Any]:
        return get_shop(request).credits_snapshot()

    return app


app = create_app()
