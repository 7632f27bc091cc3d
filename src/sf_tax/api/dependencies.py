"""FastAPI dependency: an explicitly constructed TaxResolver per request."""

from config.settings import settings
from src.sf_common.http_client import get_http_client
from src.sf_tax.application.resolver import TaxResolver
from src.sf_tax.infrastructure.stripe_tax import StripeTaxClient


async def get_tax_resolver() -> TaxResolver:
    provider = None
    if settings.TAX_ENABLED and settings.STRIPE_SECRET_KEY:
        provider = StripeTaxClient(
            http=await get_http_client(),
            secret_key=settings.STRIPE_SECRET_KEY,
            base_url=settings.STRIPE_API_URL,
        )
    return TaxResolver(enabled=settings.TAX_ENABLED, provider=provider)
