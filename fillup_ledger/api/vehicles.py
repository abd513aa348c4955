"""Routes Vehicules / Vehicle API routes."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fillup_ledger.api.deps import get_ledger, get_mpg_calculator, get_vehicle_or_404
from fillup_ledger.config import settings
from fillup_ledger.database import get_db
from fillup_ledger.ledger import SqlFillupLedger
from fillup_ledger.models.fillup import Fillup
from fillup_ledger.models.vehicle import Vehicle
from fillup_ledger.rate_limit import limiter
from fillup_ledger.schemas.vehicle import VehicleCreate, VehicleRead, VehicleStatsRead, VehicleUpdate
from fillup_ledger.services.mpg_calculator import MpgCalculatorService
from fillup_ledger.services.stats_service import VehicleStatsService

router = APIRouter()


@router.get("/", response_model=list[VehicleRead])
async def list_vehicles(db: AsyncSession = Depends(get_db)):
    """Lister les vehicules / List vehicles."""
    result = await db.execute(select(Vehicle).order_by(Vehicle.name))
    return result.scalars().all()


@router.get("/{vehicle_id}", response_model=VehicleRead)
async def get_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    """Obtenir un vehicule par ID / Get vehicle by ID."""
    return await get_vehicle_or_404(vehicle_id, db)


@router.post("/", response_model=VehicleRead, status_code=201)
async def create_vehicle(data: VehicleCreate, db: AsyncSession = Depends(get_db)):
    """Créer un vehicule / Create a vehicle."""
    vehicle = Vehicle(**data.model_dump())
    db.add(vehicle)
    await db.flush()
    await db.refresh(vehicle)
    return vehicle


@router.put("/{vehicle_id}", response_model=VehicleRead)
async def update_vehicle(vehicle_id: int, data: VehicleUpdate, db: AsyncSession = Depends(get_db)):
    """Modifier un vehicule / Update a vehicle."""
    vehicle = await get_vehicle_or_404(vehicle_id, db)
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None or key == "vin":
            setattr(vehicle, key, value)
    await db.flush()
    await db.refresh(vehicle)
    return vehicle


@router.delete("/{vehicle_id}", status_code=204)
async def delete_vehicle(vehicle_id: int, db: AsyncSession = Depends(get_db)):
    """Supprimer un vehicule et ses pleins / Delete a vehicle and its fill-ups."""
    vehicle = await get_vehicle_or_404(vehicle_id, db)
    await db.execute(delete(Fillup).where(Fillup.vehicle_id == vehicle.id))
    await db.delete(vehicle)


@router.get("/{vehicle_id}/stats", response_model=VehicleStatsRead)
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
async def vehicle_stats(
    request: Request,
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    ledger: SqlFillupLedger = Depends(get_ledger),
    calculator: MpgCalculatorService = Depends(get_mpg_calculator),
):
    """Statistiques de consommation / Fuel economy statistics."""
    vehicle = await get_vehicle_or_404(vehicle_id, db)
    stats = await VehicleStatsService(ledger, calculator).compute_statistics(vehicle.id, vehicle.name)
    return VehicleStatsRead.model_validate(stats)
