"""
Application entry point for the gateway.

``open_gateway`` configures logging, builds the shared HTTP client and the
three repositories, and closes the client on exit.
"""
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

import httpx

from core.config import settings
from core.logging import get_logger, setup_logging
from gateway.client import create_http_client
from gateway.connectivity import ConnectivityProbe
from gateway.repositories import CustomerRepository, ReservationRepository, TableRepository


logger = get_logger(__name__)


@dataclass(frozen=True)
class Gateway:
    """Repositories sharing one HTTP client."""

    client: httpx.AsyncClient
    customers: CustomerRepository
    tables: TableRepository
    reservations: ReservationRepository


@asynccontextmanager
async def open_gateway(
    base_url: Optional[str] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    is_online: Optional[ConnectivityProbe] = None,
    configure_logging: bool = True,
) -> AsyncIterator[Gateway]:
    """
    Open a gateway session.

    Example:
        async with open_gateway() as gateway:
            tables = await gateway.tables.get_all()
    """
    if configure_logging:
        setup_logging()

    client = create_http_client(base_url=base_url, transport=transport)
    logger.info(
        "Gateway opened",
        extra={"endpoint": str(client.base_url), "environment": settings.app_env},
    )
    try:
        yield Gateway(
            client=client,
            customers=CustomerRepository(client, is_online=is_online),
            tables=TableRepository(client, is_online=is_online),
            reservations=ReservationRepository(client, is_online=is_online),
        )
    finally:
        await client.aclose()
        logger.info("Gateway closed")
