"""Erreurs metier / Domain errors.

Les absences de MPG (plein partiel, oubli, pas d'ancre) ne sont jamais des
erreurs : elles sont representees par ``None``.
Missing MPG (partial, missed, no anchor) is never an error: it is ``None``.
"""


class InvalidFillupError(ValueError):
    """Plein incoherent / Malformed fill-up passed by the caller."""


class InvalidFuelVolumeError(InvalidFillupError):
    """Volume de carburant nul, negatif ou absent / Fuel volume missing, zero or negative."""

    def __init__(self, fuel_volume=None):
        self.fuel_volume = fuel_volume
        super().__init__("fuel volume must be positive")


class FillupNotRecordedError(InvalidFillupError):
    """Le plein n'est pas visible dans le registre / Fill-up is not visible through the ledger."""

    def __init__(self, vehicle_id: int, odometer: int):
        self.vehicle_id = vehicle_id
        self.odometer = odometer
        super().__init__(
            f"No fuel recorded up to odometer {odometer} for vehicle {vehicle_id}; "
            "the fill-up must be persisted before computing its MPG"
        )


class InvalidOdometerError(ValueError):
    """Releve kilometrique incoherent / Odometer reading conflicts with existing fill-ups."""

    @classmethod
    def duplicate(cls, odometer: int) -> "InvalidOdometerError":
        return cls(f"Odometer reading {odometer} is already recorded for this vehicle")

    @classmethod
    def not_after(cls, odometer: int, previous: int) -> "InvalidOdometerError":
        return cls(f"Odometer reading {odometer} must be greater than previous reading {previous}")

    @classmethod
    def not_before(cls, odometer: int, following: int) -> "InvalidOdometerError":
        return cls(f"Odometer reading {odometer} must be less than following reading {following}")
