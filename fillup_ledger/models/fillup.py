"""Modele plein de carburant / Fuel fill-up model."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Index, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fillup_ledger.database import Base
from fillup_ledger.models.vehicle import _utcnow


class Fillup(Base):
    """Plein / Fill-up event.

    L'ordre MPG est celui de l'odometre, pas de la date.
    MPG ordering follows the odometer, not the date.
    """
    __tablename__ = "fillups"
    __table_args__ = (
        # Pas d'egalite d'odometre par vehicule / No odometer ties per vehicle
        Index("ix_fillups_vehicle_odometer", "vehicle_id", "odometer", unique=True),
        Index("ix_fillups_vehicle_date", "vehicle_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    odometer: Mapped[int] = mapped_column(BigInteger, nullable=False)
    fuel_volume: Mapped[Decimal] = mapped_column(Numeric(10, 3), nullable=False)
    price_per_unit: Mapped[Decimal] = mapped_column(Numeric(10, 3), nullable=False)
    total_cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    is_partial: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_missed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="fillups")

    def __repr__(self) -> str:
        return f"<Fillup {self.odometer} - {self.fuel_volume} - vehicle {self.vehicle_id}>"
