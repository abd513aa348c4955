"""
Registre des pleins / Fill-up ledger.

Requetes ordonnees sur les pleins d'un vehicule. La recherche d'ancre et la
somme de carburant sont faites par la base (une ligne / un agregat) pour ne
jamais charger tout l'historique lors d'un calcul de MPG.
Ordered queries over a vehicle's fill-ups. The anchor search and the fuel sum
run in the database (one row / one aggregate) so an MPG computation never
loads the whole history.
"""

from datetime import datetime
from decimal import Decimal
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fillup_ledger.models.fillup import Fillup


class FillupLedger(Protocol):
    """Contrat de requetes consomme par le calculateur / Query contract used by the calculator."""

    async def ordered(self, vehicle_id: int) -> list[Fillup]:
        """Pleins du vehicule par odometre croissant / Vehicle fill-ups by ascending odometer."""
        ...

    async def last_full_before(self, vehicle_id: int, odometer: int) -> Fillup | None:
        """Dernier plein complet strictement avant ``odometer`` / Last full fill-up strictly below ``odometer``."""
        ...

    async def sum_fuel_in_range(self, vehicle_id: int, low_exclusive: int, high_inclusive: int) -> Decimal:
        """Carburant sur ``(low, high]``, zero si vide / Fuel over ``(low, high]``, zero when empty."""
        ...


class SqlFillupLedger:
    """Registre adosse a une session SQLAlchemy / Ledger backed by an SQLAlchemy session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def ordered(self, vehicle_id: int) -> list[Fillup]:
        result = await self.db.execute(
            select(Fillup).where(Fillup.vehicle_id == vehicle_id).order_by(Fillup.odometer.asc())
        )
        return list(result.scalars().all())

    async def last_full_before(self, vehicle_id: int, odometer: int) -> Fillup | None:
        result = await self.db.execute(
            select(Fillup)
            .where(
                Fillup.vehicle_id == vehicle_id,
                Fillup.odometer < odometer,
                Fillup.is_partial.is_(False),
            )
            .order_by(Fillup.odometer.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def sum_fuel_in_range(self, vehicle_id: int, low_exclusive: int, high_inclusive: int) -> Decimal:
        result = await self.db.execute(
            select(func.sum(Fillup.fuel_volume)).where(
                Fillup.vehicle_id == vehicle_id,
                Fillup.odometer > low_exclusive,
                Fillup.odometer <= high_inclusive,
            )
        )
        total = result.scalar()
        if total is None:
            return Decimal("0")
        return total if isinstance(total, Decimal) else Decimal(str(total))

    # --- Requetes de presentation / Presentation queries ---

    async def by_date_desc(self, vehicle_id: int) -> list[Fillup]:
        result = await self.db.execute(
            select(Fillup)
            .where(Fillup.vehicle_id == vehicle_id)
            .order_by(Fillup.date.desc(), Fillup.odometer.desc())
        )
        return list(result.scalars().all())

    async def recent(self, vehicle_id: int, limit: int) -> list[Fillup]:
        result = await self.db.execute(
            select(Fillup)
            .where(Fillup.vehicle_id == vehicle_id)
            .order_by(Fillup.date.desc(), Fillup.odometer.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def find_by_odometer(
        self, vehicle_id: int, odometer: int, exclude_id: int | None = None
    ) -> Fillup | None:
        query = select(Fillup).where(Fillup.vehicle_id == vehicle_id, Fillup.odometer == odometer)
        if exclude_id is not None:
            query = query.where(Fillup.id != exclude_id)
        result = await self.db.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def neighbours_by_date(
        self, vehicle_id: int, date: datetime, exclude_id: int | None = None
    ) -> tuple[Fillup | None, Fillup | None]:
        """Voisins chronologiques d'une date / Chronological neighbours of a date.

        Retourne (dernier plein date <= date, premier plein date > date).
        Returns (latest fill-up dated <= date, earliest fill-up dated > date).
        """
        base = select(Fillup).where(Fillup.vehicle_id == vehicle_id)
        if exclude_id is not None:
            base = base.where(Fillup.id != exclude_id)

        before = await self.db.execute(
            base.where(Fillup.date <= date)
            .order_by(Fillup.date.desc(), Fillup.odometer.desc())
            .limit(1)
        )
        after = await self.db.execute(
            base.where(Fillup.date > date)
            .order_by(Fillup.date.asc(), Fillup.odometer.asc())
            .limit(1)
        )
        return before.scalar_one_or_none(), after.scalar_one_or_none()
