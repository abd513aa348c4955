"""
Dépendances des routes / Route dependencies.
Injectées dans les routes via Depends().
"""

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from fillup_ledger.database import get_db
from fillup_ledger.ledger import SqlFillupLedger
from fillup_ledger.models.vehicle import Vehicle
from fillup_ledger.services.mpg_calculator import MpgCalculatorService


def get_ledger(db: AsyncSession = Depends(get_db)) -> SqlFillupLedger:
    """Registre lie a la session de la requete / Ledger bound to the request session."""
    return SqlFillupLedger(db)


def get_mpg_calculator(ledger: SqlFillupLedger = Depends(get_ledger)) -> MpgCalculatorService:
    return MpgCalculatorService(ledger)


async def get_vehicle_or_404(vehicle_id: int, db: AsyncSession) -> Vehicle:
    vehicle = await db.get(Vehicle, vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    return vehicle
