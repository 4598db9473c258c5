# roi_api/core/rate_limit.py
# -----------------------------------------------------------------------------
# Fixed-window admission control (slowapi)
# - keyed by client address, in-memory storage
# - one counter shared by every calculation route
# -----------------------------------------------------------------------------
from slowapi import Limiter
from slowapi.util import get_remote_address

from roi_api.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    storage_uri="memory://",
    strategy="fixed-window",
)

calculations_limit = limiter.shared_limit(settings.rate_limit, scope="calculations")
