"""FastAPI dependencies: caller token forwarding and the marketplace client.

Usage:
    from src.sf_marketplace.api.dependencies import get_bearer_token

    @router.post("/privileged")
    async def privileged(token: str = Depends(get_bearer_token)):
        ...
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config.settings import settings
from src.sf_common.http_client import get_http_client
from src.sf_marketplace.domain.client import MarketplaceClientProtocol
from src.sf_marketplace.infrastructure.client import MarketplaceClient

# Token is opaque here; the hosted platform validates it
bearer_scheme = HTTPBearer(auto_error=False)

_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Missing bearer token",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Required caller token (privileged endpoints)."""
    if credentials is None or not credentials.credentials:
        raise _CREDENTIALS_EXCEPTION
    return credentials.credentials


async def get_optional_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """Caller token when present (public pricing reads)."""
    return credentials.credentials if credentials else None


async def get_marketplace_client() -> MarketplaceClientProtocol:
    return MarketplaceClient(
        http=await get_http_client(),
        base_url=settings.MARKETPLACE_API_URL,
        assets_url=settings.MARKETPLACE_ASSETS_URL,
        client_id=settings.MARKETPLACE_CLIENT_ID,
        commission_asset_path=settings.COMMISSION_ASSET_PATH,
        client_secret=settings.MARKETPLACE_CLIENT_SECRET,
    )
