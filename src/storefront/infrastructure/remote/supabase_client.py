import logging

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, acreate_client

from storefront.domain.exceptions import ConfigurationError, NetworkFailureError
from storefront.infrastructure.config import Settings

logger = logging.getLogger(__name__)


async def supabase_public(settings: Settings) -> AsyncClient:
    """
    Create an async Supabase client with the anon/public key.

    The storefront only reads products, inserts orders and reads orders
    back, all of which the public key allows.

    Raises:
        ConfigurationError: if SUPABASE_URL or SUPABASE_KEY is not set.
    """
    if not settings.SUPABASE_URL:
        raise ConfigurationError("Missing SUPABASE_URL in .env")
    if not settings.SUPABASE_KEY:
        raise ConfigurationError("Missing SUPABASE_KEY in .env")
    return await acreate_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


async def execute(query, description: str) -> list[dict]:
    """Run a PostgREST query and return its rows.

    Client and transport errors surface as NetworkFailureError.
    """
    try:
        response = await query.execute()
    except (APIError, httpx.HTTPError) as exc:
        logger.error("Remote store call failed (%s): %s", description, exc)
        raise NetworkFailureError(f"Could not {description}: {exc}") from exc
    return response.data or []


async def close(client: AsyncClient) -> None:
    """Release the HTTP connections held by the client's PostgREST session."""
    await client.postgrest.aclose()
