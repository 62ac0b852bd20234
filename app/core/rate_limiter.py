import os
from slowapi import Limiter
from slowapi.util import get_remote_address
from app.core.config import settings
from loguru import logger


# ----------------------------------------------------------------
# 1. CLIENT IP BEHIND PROXIES
# ----------------------------------------------------------------
def get_real_ip(request):
    """
    Leftmost X-Forwarded-For entry, then X-Real-IP, then the socket peer.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return get_remote_address(request)


# ----------------------------------------------------------------
# 2. REDIS CONNECTION STRING (TLS for managed Redis)
# ----------------------------------------------------------------
storage_uri = settings.REDIS_URL

if storage_uri and storage_uri.startswith("redis://") and not os.environ.get("DEV_MODE"):
    storage_uri = storage_uri.replace("redis://", "rediss://", 1)

# Tests hammer the auth endpoints; never throttle them
rate_limit_enabled = os.environ.get("TESTING", "").lower() != "true"


# ----------------------------------------------------------------
# 3. LIMITER WITH IN-MEMORY FALLBACK
# ----------------------------------------------------------------
try:
    if storage_uri:
        logger.info("Initializing rate limiter with Redis storage")
        limiter = Limiter(
            key_func=get_real_ip,
            storage_uri=storage_uri,
            strategy="fixed-window",
            storage_options={"socket_connect_timeout": 5, "retry_on_timeout": True},
            enabled=rate_limit_enabled,
        )
    else:
        logger.warning("REDIS_URL not set. Falling back to in-memory rate limiting.")
        limiter = Limiter(key_func=get_real_ip, enabled=rate_limit_enabled)

except Exception as e:
    logger.error(f"Failed to configure Redis rate limiting: {e}")
    limiter = Limiter(key_func=get_real_ip, enabled=rate_limit_enabled)
