"""
Rate limiting de endpoints concretos (login, registro)
"""
from fastapi import Request, HTTPException
from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter
from slowapi.util import get_remote_address

LOGIN_LIMIT = "10/minute"
REGISTER_LIMIT = "5/minute"


def create_limiter() -> MovingWindowRateLimiter:
    return MovingWindowRateLimiter(MemoryStorage())


def apply_rate_limit(request: Request, limit: str):
    """
    Registra un acceso en la ventana deslizante de ``limits`` (``limiter.hit``
    con el límite parseado, la ruta y la IP del cliente) y responde 429 cuando
    la ventana ya está llena. Con ``app.state.limiter = None`` no cuenta nada.
    """
    limiter = getattr(request.app.state, "limiter", None)
    if limiter is None:
        return

    key = get_remote_address(request)
    # Contador por endpoint y por IP
    if not limiter.hit(parse(limit), request.url.path, key):
        raise HTTPException(
            status_code=429,
            detail=f"Too many requests. Limit: {limit}. Try again later.",
        )
