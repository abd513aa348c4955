"""Routes Pleins / Fill-up API routes.

Chaque plein renvoye porte son MPG calcule (null si non mesurable).
Every returned fill-up carries its computed MPG (null when not measurable).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fillup_ledger.api.deps import get_ledger, get_mpg_calculator, get_vehicle_or_404
from fillup_ledger.config import settings
from fillup_ledger.database import get_db
from fillup_ledger.ledger import SqlFillupLedger
from fillup_ledger.models.fillup import Fillup
from fillup_ledger.rate_limit import limiter
from fillup_ledger.schemas.fillup import FillupCreate, FillupRead, FillupUpdate
from fillup_ledger.services.mpg_calculator import MpgCalculatorService
from fillup_ledger.services.odometer_validator import validate_odometer

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_fillup_or_404(fillup_id: int, db: AsyncSession) -> Fillup:
    fillup = await db.get(Fillup, fillup_id)
    if not fillup:
        raise HTTPException(status_code=404, detail="Fillup not found")
    return fillup


async def _with_mpg(fillups: list[Fillup], calculator: MpgCalculatorService) -> list[FillupRead]:
    return [FillupRead.from_fillup(f, await calculator.compute_mpg(f)) for f in fillups]


@router.get("/fillups/{fillup_id}", response_model=FillupRead)
async def get_fillup(
    fillup_id: int,
    db: AsyncSession = Depends(get_db),
    calculator: MpgCalculatorService = Depends(get_mpg_calculator),
):
    """Obtenir un plein par ID / Get fill-up by ID."""
    fillup = await _get_fillup_or_404(fillup_id, db)
    return FillupRead.from_fillup(fillup, await calculator.compute_mpg(fillup))


@router.post("/fillups/", response_model=FillupRead, status_code=201)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def create_fillup(
    request: Request,
    data: FillupCreate,
    db: AsyncSession = Depends(get_db),
    ledger: SqlFillupLedger = Depends(get_ledger),
    calculator: MpgCalculatorService = Depends(get_mpg_calculator),
):
    """Créer un plein / Create a fill-up."""
    await get_vehicle_or_404(data.vehicle_id, db)
    await validate_odometer(ledger, data.vehicle_id, data.odometer, data.date)

    fillup = Fillup(**data.model_dump())
    db.add(fillup)
    await db.flush()
    await db.refresh(fillup)
    logger.info("Fillup %s recorded for vehicle %s at odometer %s", fillup.id, fillup.vehicle_id, fillup.odometer)
    return FillupRead.from_fillup(fillup, await calculator.compute_mpg(fillup))


@router.put("/fillups/{fillup_id}", response_model=FillupRead)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def update_fillup(
    request: Request,
    fillup_id: int,
    data: FillupUpdate,
    db: AsyncSession = Depends(get_db),
    ledger: SqlFillupLedger = Depends(get_ledger),
    calculator: MpgCalculatorService = Depends(get_mpg_calculator),
):
    """Modifier un plein / Update a fill-up."""
    fillup = await _get_fillup_or_404(fillup_id, db)
    # null = champ inchange / null means unchanged
    changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    if "odometer" in changes or "date" in changes:
        await validate_odometer(
            ledger,
            fillup.vehicle_id,
            changes.get("odometer", fillup.odometer),
            changes.get("date", fillup.date),
            exclude_id=fillup.id,
        )

    for key, value in changes.items():
        setattr(fillup, key, value)
    await db.flush()
    await db.refresh(fillup)
    return FillupRead.from_fillup(fillup, await calculator.compute_mpg(fillup))


@router.delete("/fillups/{fillup_id}", status_code=204)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def delete_fillup(request: Request, fillup_id: int, db: AsyncSession = Depends(get_db)):
    """Supprimer un plein / Delete a fill-up."""
    fillup = await _get_fillup_or_404(fillup_id, db)
    await db.delete(fillup)


@router.get("/vehicles/{vehicle_id}/fillups", response_model=list[FillupRead])
async def list_vehicle_fillups(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    ledger: SqlFillupLedger = Depends(get_ledger),
    calculator: MpgCalculatorService = Depends(get_mpg_calculator),
):
    """Pleins d'un vehicule, du plus recent / Vehicle fill-ups, newest first."""
    await get_vehicle_or_404(vehicle_id, db)
    return await _with_mpg(await ledger.by_date_desc(vehicle_id), calculator)


@router.get("/vehicles/{vehicle_id}/fillups/recent", response_model=list[FillupRead])
async def list_recent_fillups(
    vehicle_id: int,
    limit: int = Query(default=50, ge=1),
    db: AsyncSession = Depends(get_db),
    ledger: SqlFillupLedger = Depends(get_ledger),
    calculator: MpgCalculatorService = Depends(get_mpg_calculator),
):
    """Derniers pleins pour l'analyse de tendance / Recent fill-ups for trend analysis."""
    await get_vehicle_or_404(vehicle_id, db)
    fillups = await ledger.recent(vehicle_id, min(limit, settings.RECENT_FILLUPS_MAX))
    return await _with_mpg(fillups, calculator)
