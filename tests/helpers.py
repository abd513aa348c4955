"""Outils de test / Test helpers: transient fill-ups and an in-memory ledger."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from itertools import count

from fillup_ledger.models.fillup import Fillup

_ids = count(1)
BASE_DATE = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


def make_fillup(
    odometer: int,
    fuel_volume="10.0",
    *,
    vehicle_id: int = 1,
    is_partial: bool = False,
    is_missed: bool = False,
    price_per_unit="3.500",
    total_cost="35.00",
    date: datetime | None = None,
) -> Fillup:
    """Plein non persiste / Transient fill-up."""
    return Fillup(
        id=next(_ids),
        vehicle_id=vehicle_id,
        date=date or BASE_DATE + timedelta(days=odometer // 100),
        odometer=odometer,
        fuel_volume=None if fuel_volume is None else Decimal(fuel_volume),
        price_per_unit=Decimal(price_per_unit),
        total_cost=Decimal(total_cost),
        is_partial=is_partial,
        is_missed=is_missed,
    )


class InMemoryFillupLedger:
    """Registre en memoire pour les tests du calculateur / In-memory ledger for calculator tests."""

    def __init__(self, fillups=()):
        self.fillups: list[Fillup] = list(fillups)
        self.calls: list[str] = []

    def add(self, *fillups: Fillup) -> None:
        self.fillups.extend(fillups)

    def _for(self, vehicle_id: int) -> list[Fillup]:
        return [f for f in self.fillups if f.vehicle_id == vehicle_id]

    async def ordered(self, vehicle_id: int) -> list[Fillup]:
        self.calls.append("ordered")
        return sorted(self._for(vehicle_id), key=lambda f: f.odometer)

    async def last_full_before(self, vehicle_id: int, odometer: int) -> Fillup | None:
        self.calls.append("last_full_before")
        candidates = [f for f in self._for(vehicle_id) if f.odometer < odometer and not f.is_partial]
        return max(candidates, key=lambda f: f.odometer, default=None)

    async def sum_fuel_in_range(self, vehicle_id: int, low_exclusive: int, high_inclusive: int) -> Decimal:
        self.calls.append("sum_fuel_in_range")
        return sum(
            (f.fuel_volume for f in self._for(vehicle_id) if low_exclusive < f.odometer <= high_inclusive),
            Decimal("0"),
        )
