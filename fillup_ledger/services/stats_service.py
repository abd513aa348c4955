"""
Service de statistiques vehicule / Vehicle statistics service.
Agrege les pleins et les MPG d'un vehicule.
"""

from dataclasses import dataclass
from decimal import Decimal

from fillup_ledger.config import settings
from fillup_ledger.ledger import FillupLedger
from fillup_ledger.services.mpg_calculator import MpgCalculatorService, quantize_half_up


@dataclass
class VehicleStatistics:
    """Resume par vehicule / Per-vehicle summary. Les MPG absents valent None."""
    vehicle_id: int
    vehicle_name: str | None = None
    total_fillups: int = 0
    total_distance: int = 0
    total_fuel_used: Decimal = Decimal("0")
    total_spent: Decimal = Decimal("0")
    average_mpg: Decimal | None = None
    best_mpg: Decimal | None = None
    worst_mpg: Decimal | None = None
    average_price_per_unit: Decimal | None = None


class VehicleStatsService:
    """Statistiques de consommation / Fuel economy statistics."""

    def __init__(self, ledger: FillupLedger, calculator: MpgCalculatorService | None = None):
        self.ledger = ledger
        self.calculator = calculator or MpgCalculatorService(ledger)

    async def compute_statistics(self, vehicle_id: int, vehicle_name: str | None = None) -> VehicleStatistics:
        fillups = await self.ledger.ordered(vehicle_id)
        if not fillups:
            return VehicleStatistics(vehicle_id=vehicle_id, vehicle_name=vehicle_name)

        total_fillups = len(fillups)
        # Bornes par odometre / Odometer bounds
        total_distance = fillups[-1].odometer - fillups[0].odometer
        total_fuel_used = sum((f.fuel_volume for f in fillups), Decimal("0"))
        total_spent = sum((f.total_cost for f in fillups), Decimal("0"))
        average_price = quantize_half_up(
            sum((f.price_per_unit for f in fillups), Decimal("0")) / total_fillups,
            settings.PRICE_DECIMALS,
        )

        mpg_values = []
        for fillup in fillups:
            mpg = await self.calculator.compute_mpg(fillup)
            if mpg is not None:
                mpg_values.append(mpg)

        stats = VehicleStatistics(
            vehicle_id=vehicle_id,
            vehicle_name=vehicle_name,
            total_fillups=total_fillups,
            total_distance=total_distance,
            total_fuel_used=total_fuel_used,
            total_spent=total_spent,
            average_price_per_unit=average_price,
        )
        if mpg_values:
            stats.average_mpg = quantize_half_up(
                sum(mpg_values, Decimal("0")) / len(mpg_values), self.calculator.decimals
            )
            stats.best_mpg = max(mpg_values)
            stats.worst_mpg = min(mpg_values)
        return stats
