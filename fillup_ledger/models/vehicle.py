"""Modele Vehicule / Vehicle model.

Un vehicule possede ses pleins ; le supprimer supprime ses pleins.
A vehicle owns its fill-ups; deleting it deletes them.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fillup_ledger.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FuelUnit(str, enum.Enum):
    """Unite de volume de carburant / Fuel volume unit."""
    GALLONS = "GALLONS"
    LITERS = "LITERS"


class DistanceUnit(str, enum.Enum):
    """Unite de distance de l'odometre / Odometer distance unit."""
    MILES = "MILES"
    KILOMETERS = "KILOMETERS"


class Vehicle(Base):
    """Vehicule suivi / Tracked vehicle."""
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    make: Mapped[str] = mapped_column(String(100), nullable=False)
    model: Mapped[str] = mapped_column(String(100), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    vin: Mapped[str | None] = mapped_column(String(17))

    # Unites (MPG = unite de distance / unite de carburant)
    # Units (MPG = distance unit per fuel unit)
    fuel_unit: Mapped[FuelUnit] = mapped_column(Enum(FuelUnit), default=FuelUnit.GALLONS, nullable=False)
    distance_unit: Mapped[DistanceUnit] = mapped_column(
        Enum(DistanceUnit), default=DistanceUnit.MILES, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    # Relations
    fillups: Mapped[list["Fillup"]] = relationship(
        back_populates="vehicle", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Vehicle {self.id} - {self.name}>"
