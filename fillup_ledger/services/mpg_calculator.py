"""
Service de calcul de consommation / Fuel economy (MPG) calculation service.

Le MPG d'un plein complet se mesure depuis l'ancre (dernier plein complet
d'odometre inferieur) : distance parcourue / carburant cumule sur l'intervalle,
pleins partiels intermediaires compris.
The MPG of a full fill-up is measured from its anchor (the last full fill-up
with a lower odometer): distance travelled / fuel accumulated over the
interval, partial fill-ups in between included.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from fillup_ledger.config import settings
from fillup_ledger.exceptions import FillupNotRecordedError, InvalidFuelVolumeError
from fillup_ledger.ledger import FillupLedger
from fillup_ledger.models.fillup import Fillup

log = logging.getLogger(__name__)


def quantize_half_up(value: Decimal, decimals: int) -> Decimal:
    """Arrondi commercial / Half-up rounding to ``decimals`` places."""
    return value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def validate_fuel_volume(fuel_volume: Decimal | None) -> None:
    """Le volume doit etre strictement positif / Fuel volume must be strictly positive."""
    if fuel_volume is None or fuel_volume <= 0:
        raise InvalidFuelVolumeError(fuel_volume)


class MpgCalculatorService:
    """Calcul du MPG par plein / Per fill-up MPG calculation.

    Sans etat : toutes les donnees viennent du registre.
    Stateless: every input comes from the ledger.
    """

    def __init__(self, ledger: FillupLedger, decimals: int | None = None):
        self.ledger = ledger
        self.decimals = settings.MPG_DECIMALS if decimals is None else decimals

    async def compute_mpg(self, fillup: Fillup) -> Decimal | None:
        """
        MPG du plein, ou None si non mesurable / Fill-up MPG, or None when it cannot be measured.

        Le volume est verifie avant tout court-circuit : un volume invalide est un
        defaut de donnees, pas un "pas de MPG".
        Fuel volume is validated before any short-circuit.
        """
        validate_fuel_volume(fillup.fuel_volume)

        if fillup.is_partial:
            return None
        if fillup.is_missed:
            return None

        anchor = await self.ledger.last_full_before(fillup.vehicle_id, fillup.odometer)
        if anchor is None:
            # Premier plein complet, ou insere avant tous les autres / First full fill-up
            return None

        distance = fillup.odometer - anchor.odometer
        fuel = await self.ledger.sum_fuel_in_range(fillup.vehicle_id, anchor.odometer, fillup.odometer)
        if fuel < fillup.fuel_volume:
            raise FillupNotRecordedError(fillup.vehicle_id, fillup.odometer)

        mpg = quantize_half_up(Decimal(distance) / fuel, self.decimals)
        log.debug(
            "vehicle %s: odometer %s anchored at %s, %s over %s fuel -> %s",
            fillup.vehicle_id, fillup.odometer, anchor.odometer, distance, fuel, mpg,
        )
        return mpg
