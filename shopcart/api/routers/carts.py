#shopcart/api/routers/carts.py
import uuid

from fastapi import APIRouter, Depends

from shopcart.api.auth import get_current_principal, require_admin
from shopcart.api.deps import get_cart_service
from shopcart.api.responses import success
from shopcart.domain.principal import Principal
from shopcart.domain.schemas import CartDetailOut, CartItemOut, CartOut, ItemIn
from shopcart.services.cart_service import CartService, ItemsSource

router = APIRouter(prefix="/cart", tags=["cart"])

_SOURCE_MESSAGES = {
    ItemsSource.CACHE: "data fetched from cache",
    ItemsSource.STORE: "data fetched from store",
    ItemsSource.STORE_FALLBACK: "data fetched from store (cache unavailable)",
}


@router.post("")
def create_cart(
    principal: Principal = Depends(get_current_principal),
    svc: CartService = Depends(get_cart_service),
):
    cart, created = svc.create_cart(principal)
    data = CartOut.model_validate(cart)
    if created:
        return success(201, "Cart created", data)
    return success(200, "Cart already exists", data)


@router.post("/item")
def add_or_update_item(
    payload: ItemIn,
    principal: Principal = Depends(get_current_principal),
    svc: CartService = Depends(get_cart_service),
):
    item = svc.add_or_update_item(principal, payload.product_id, payload.quantity)
    return success(200, "Cart item saved", CartItemOut.model_validate(item))


@router.get("/items")
def list_items(
    principal: Principal = Depends(get_current_principal),
    svc: CartService = Depends(get_cart_service),
):
    result = svc.list_items(principal)
    return success(200, _SOURCE_MESSAGES[result.source], result.items)


@router.delete("/item/{product_id}")
def remove_item(
    product_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    svc: CartService = Depends(get_cart_service),
):
    svc.remove_item(principal, product_id)
    return success(200, "Cart item removed")


# ---------------------------------------------------------------- admin

@router.get("/{user_id}")
def get_user_cart(
    user_id: uuid.UUID,
    _: Principal = Depends(require_admin),
    svc: CartService = Depends(get_cart_service),
):
    cart, items = svc.get_user_cart(user_id)
    data = CartDetailOut(**CartOut.model_validate(cart).model_dump(), items=items)
    return success(200, "data fetched successfully", data)


@router.delete("/{user_id}")
def delete_user_cart(
    user_id: uuid.UUID,
    _: Principal = Depends(require_admin),
    svc: CartService = Depends(get_cart_service),
):
    svc.delete_user_cart(user_id)
    return success(200, "Cart deleted")
