"""
Modèles SQLAlchemy / SQLAlchemy models.
Importer tous les modèles ici pour que Base.metadata les connaisse.
Import all models here so Base.metadata knows about them.
"""

from fillup_ledger.models.vehicle import DistanceUnit, FuelUnit, Vehicle
from fillup_ledger.models.fillup import Fillup

__all__ = [
    "Vehicle",
    "FuelUnit",
    "DistanceUnit",
    "Fillup",
]
