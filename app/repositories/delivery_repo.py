# app/repositories/delivery_repo.py
from sqlmodel import Session, select

from app.models.delivery import GovernorateDeliveryPrice


class DeliveryPriceRepository:
    """
    Read access to governorate_delivery_prices.
    """

    def list_active(self, session: Session) -> list[GovernorateDeliveryPrice]:
        stmt = (
            select(GovernorateDeliveryPrice)
            .where(GovernorateDeliveryPrice.is_active == True)  # noqa: E712
            .order_by(GovernorateDeliveryPrice.governorate)
        )
        return list(session.exec(stmt).all())

    def get_active_by_governorate(
        self,
        session: Session,
        governorate: str,
    ) -> GovernorateDeliveryPrice | None:
        """Exact (case-sensitive) name match against active rows."""
        stmt = select(GovernorateDeliveryPrice).where(
            GovernorateDeliveryPrice.governorate == governorate,
            GovernorateDeliveryPrice.is_active == True,  # noqa: E712
        )
        return session.exec(stmt).first()
