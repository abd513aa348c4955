"""Rate limiting global / Global rate limiter.

Utilise slowapi pour limiter les requetes par IP (ecritures de pleins et
statistiques).
Per-IP limits on fill-up writes and statistics, via slowapi.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from fillup_ledger.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
