"""Schémas Plein / Fill-up schemas."""

from datetime import datetime, timezone
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_utc(value: datetime | None) -> datetime | None:
    """Normaliser en UTC (naif = UTC) / Normalise to UTC (naive means UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class FillupCreate(BaseModel):
    vehicle_id: int
    date: datetime
    odometer: int = Field(gt=0)
    fuel_volume: Decimal = Field(gt=0, max_digits=10, decimal_places=3)
    price_per_unit: Decimal = Field(gt=0, max_digits=10, decimal_places=3)
    total_cost: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    is_partial: bool = False
    is_missed: bool = False

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class FillupUpdate(BaseModel):
    """Le vehicule d'un plein ne change jamais / A fill-up never changes vehicle."""
    date: datetime | None = None
    odometer: int | None = Field(default=None, gt=0)
    fuel_volume: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=3)
    price_per_unit: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=3)
    total_cost: Decimal | None = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    is_partial: bool | None = None
    is_missed: bool | None = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class FillupRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    vehicle_id: int
    date: datetime
    odometer: int
    fuel_volume: float
    price_per_unit: float
    total_cost: float
    is_partial: bool
    is_missed: bool
    mpg: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("date", "created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: datetime | None) -> datetime | None:
        # SQLite rend des dates naives / SQLite returns naive datetimes
        return _as_utc(value)

    @classmethod
    def from_fillup(cls, fillup, mpg: Decimal | None = None) -> "FillupRead":
        """Construire la reponse avec le MPG calcule / Build the response with the computed MPG."""
        data = cls.model_validate(fillup).model_dump()
        data["mpg"] = mpg
        return cls.model_validate(data)
