# shopcart/api/routers/orders.py
import uuid

from fastapi import APIRouter, Depends

from shopcart.api.auth import get_current_principal
from shopcart.api.deps import get_order_service
from shopcart.api.responses import success
from shopcart.domain.principal import Principal
from shopcart.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("")
def place_order(
    principal: Principal = Depends(get_current_principal),
    svc: OrderService = Depends(get_order_service),
):
    """
    Tworzy zamowienie z koszyka uzytkownika.
    Wysyla powiadomienie asynchronicznie.
    """
    return success(201, "Order placed", svc.place_order(principal))


@router.get("")
def list_orders(
    principal: Principal = Depends(get_current_principal),
    svc: OrderService = Depends(get_order_service),
):
    return success(200, "data fetched successfully", svc.list_orders(principal))


@router.get("/{order_id}")
def get_order(
    order_id: uuid.UUID,
    principal: Principal = Depends(get_current_principal),
    svc: OrderService = Depends(get_order_service),
):
    return success(200, "data fetched successfully", svc.get_order(principal, order_id))
