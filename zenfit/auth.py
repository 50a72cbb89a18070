"""Optional shared-secret guard for the habit API."""

import secrets

from fastapi import HTTPException, Header

from zenfit.config import settings


def _presented_key(x_api_key: str | None, authorization: str | None) -> str | None:
    if x_api_key is not None:
        return x_api_key
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return None


async def require_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> None:
    """Accept X-API-Key or Authorization: Bearer. Open when KERNEL_API_KEY is unset."""
    expected = settings.kernel_api_key
    if expected is None:
        return

    presented = _presented_key(x_api_key, authorization)
    if presented is None or not secrets.compare_digest(presented, expected):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
