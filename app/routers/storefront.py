# app/routers/storefront.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database import get_session
from app.repositories.delivery_repo import DeliveryPriceRepository
from app.repositories.order_repo import OrderRepository
from app.repositories.product_repo import (
    CategoryRepository,
    HeroSectionRepository,
    ProductRepository,
)
from app.schemas.delivery import DeliveryPriceRead
from app.schemas.product import HeroSectionRead
from app.services.checkout_service import CheckoutService
from app.services.product_service import ProductService

router = APIRouter(tags=["Storefront"])

product_service = ProductService(
    ProductRepository(), CategoryRepository(), HeroSectionRepository()
)
checkout_service = CheckoutService(OrderRepository(), DeliveryPriceRepository())


@router.get("/hero", response_model=HeroSectionRead)
def get_hero(session: Session = Depends(get_session)):
    """
    Active home page hero section, or the built-in default.
    """
    return product_service.get_hero(session)


@router.get("/delivery-prices", response_model=list[DeliveryPriceRead])
def list_delivery_prices(session: Session = Depends(get_session)):
    """
    Governorates offered at checkout with their delivery fee.
    """
    return checkout_service.list_delivery_prices(session)
