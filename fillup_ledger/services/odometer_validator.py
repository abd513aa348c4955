"""
Validation des releves kilometriques / Odometer reading validation.

Un plein peut etre saisi en retard (date passee) tant que son odometre reste
coherent avec ses voisins chronologiques.
A fill-up may be back-filled (past date) as long as its odometer stays
consistent with its chronological neighbours.
"""

from datetime import datetime

from fillup_ledger.exceptions import InvalidOdometerError
from fillup_ledger.ledger import SqlFillupLedger


async def validate_odometer(
    ledger: SqlFillupLedger,
    vehicle_id: int,
    odometer: int,
    date: datetime,
    exclude_id: int | None = None,
) -> None:
    """Lever InvalidOdometerError si le releve est incoherent / Raise InvalidOdometerError on conflict.

    ``exclude_id`` ignore le plein en cours de modification / skips the fill-up being updated.
    """
    if await ledger.find_by_odometer(vehicle_id, odometer, exclude_id=exclude_id) is not None:
        raise InvalidOdometerError.duplicate(odometer)

    previous, following = await ledger.neighbours_by_date(vehicle_id, date, exclude_id=exclude_id)
    if previous is not None and odometer <= previous.odometer:
        raise InvalidOdometerError.not_after(odometer, previous.odometer)
    if following is not None and odometer >= following.odometer:
        raise InvalidOdometerError.not_before(odometer, following.odometer)
