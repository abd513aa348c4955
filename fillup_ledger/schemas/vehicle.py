"""Schémas Véhicule / Vehicle schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from fillup_ledger.models.vehicle import DistanceUnit, FuelUnit


class VehicleBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    make: str = Field(min_length=1, max_length=100)
    model: str = Field(min_length=1, max_length=100)
    year: int = Field(ge=1900, le=2100)
    vin: str | None = Field(default=None, max_length=17)
    fuel_unit: FuelUnit = FuelUnit.GALLONS
    distance_unit: DistanceUnit = DistanceUnit.MILES


class VehicleCreate(VehicleBase):
    pass


class VehicleUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    make: str | None = Field(default=None, min_length=1, max_length=100)
    model: str | None = Field(default=None, min_length=1, max_length=100)
    year: int | None = Field(default=None, ge=1900, le=2100)
    vin: str | None = Field(default=None, max_length=17)


class VehicleRead(VehicleBase):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VehicleStatsRead(BaseModel):
    """Statistiques vehicule ; MPG absents = null / Vehicle statistics; absent MPG is null."""
    model_config = ConfigDict(from_attributes=True)

    vehicle_id: int
    vehicle_name: str | None = None
    total_fillups: int
    total_distance: int
    total_fuel_used: float
    total_spent: float
    average_mpg: float | None = None
    best_mpg: float | None = None
    worst_mpg: float | None = None
    average_price_per_unit: float | None = None
