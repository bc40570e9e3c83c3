"""
Repositories for the backend's REST resources.

Each repository performs CRUD over one resource collection and translates
between domain entities and the wire format through its normalizer. Every
read goes to the backend; nothing is cached. Failures are logged and
re-raised for the caller to surface.
"""
from typing import Any, Dict, Generic, List, Optional

import httpx

from core.config import settings
from core.logging import get_logger
from domain.enums import Resource
from domain.models import Customer, Reservation, Table
from gateway import connectivity
from gateway.connectivity import ConnectivityProbe
from gateway.envelope import unwrap_collection, unwrap_entity
from gateway.errors import ConnectivityError, GatewayError, TransportError
from gateway.normalizers import (
    CustomerNormalizer,
    EntityT,
    Normalizer,
    ReservationNormalizer,
    TableNormalizer,
)


logger = get_logger(__name__)


def _decode_body(response: httpx.Response) -> Any:
    """Decode a JSON body; None when the body is empty or not JSON."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.warning(
            f"Non-JSON body from {response.request.method} {response.request.url}",
            extra={"status_code": response.status_code},
        )
        return None


class ResourceRepository(Generic[EntityT]):
    """CRUD over a single REST resource."""

    resource: Resource
    entity_name: str = "resource"
    write_headers: Dict[str, str] = {"Content-Type": "application/json"}

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        path: Optional[str] = None,
        normalizer: Optional[Normalizer[EntityT]] = None,
        is_online: Optional[ConnectivityProbe] = None,
    ):
        """
        Initialize the repository.

        Args:
            client: Async HTTP client whose base_url points at the API root
            path: Collection path relative to the base URL; defaults to the
                configured path for this resource
            normalizer: Wire/domain mapping; defaults to the resource's own
            is_online: Connectivity probe checked before every request
        """
        self._client = client
        self.path = (path or self._default_path()).strip("/")
        self.normalizer = normalizer or self._default_normalizer()
        self._is_online = is_online or connectivity.is_online

    def _default_path(self) -> str:
        return getattr(settings, f"{self.resource.value}_path")

    def _default_normalizer(self) -> Normalizer[EntityT]:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get_all(self) -> List[EntityT]:
        """
        Fetch every entity in the collection.

        Returns:
            List of entities; empty when the body holds no array

        Raises:
            ConnectivityError: If no network is available
            TransportError: If the backend answers with a non-success status
        """
        try:
            response = await self._send("GET", self.path)
            if not response.is_success:
                raise self._transport_error("fetching", response, plural=True)

            items = unwrap_collection(_decode_body(response))
            return [self.normalizer.to_domain(item) for item in items if isinstance(item, dict)]
        except Exception as e:
            logger.error(
                f"Error fetching {self.resource.value}: {e}",
                extra=self._log_context("GET", self.path, e),
            )
            raise

    async def get_by_id(self, entity_id: int) -> Optional[EntityT]:
        """
        Fetch a single entity.

        Args:
            entity_id: Server-assigned id

        Returns:
            The entity, or None when the backend reports 404

        Raises:
            ConnectivityError: If no network is available
            TransportError: If the backend answers with any other non-success status
        """
        try:
            response = await self._send("GET", self._item_path(entity_id))
            if response.status_code == 404:
                return None
            if not response.is_success:
                raise self._transport_error("fetching", response)

            payload = unwrap_entity(_decode_body(response))
            if payload is None:
                logger.warning(f"Empty payload for {self.entity_name} {entity_id}")
                return None
            return self.normalizer.to_domain(payload)
        except Exception as e:
            logger.error(
                f"Error fetching {self.entity_name} with id {entity_id}: {e}",
                extra=self._log_context("GET", self._item_path(entity_id), e),
            )
            raise

    async def create(self, entity: EntityT) -> EntityT:
        """
        Persist a new entity.

        Args:
            entity: Entity to create; its id, if any, is sent as-is

        Returns:
            The entity as stored by the backend, including its id

        Raises:
            ConnectivityError: If no network is available
            TransportError: If the backend rejects the request
        """
        try:
            return await self._write("POST", self.path, entity, "creating")
        except Exception as e:
            logger.error(
                f"Error creating {self.entity_name}: {e}",
                extra=self._log_context("POST", self.path, e),
            )
            raise

    async def update(self, entity_id: int, entity: EntityT) -> EntityT:
        """
        Replace an existing entity.

        Args:
            entity_id: Server-assigned id
            entity: Full replacement

        Returns:
            The entity as stored by the backend

        Raises:
            ConnectivityError: If no network is available
            TransportError: If the backend rejects the request
        """
        try:
            return await self._write("PUT", self._item_path(entity_id), entity, "updating")
        except Exception as e:
            logger.error(
                f"Error updating {self.entity_name} with id {entity_id}: {e}",
                extra=self._log_context("PUT", self._item_path(entity_id), e),
            )
            raise

    async def delete(self, entity_id: int) -> None:
        """
        Delete an entity.

        Raises:
            ConnectivityError: If no network is available
            TransportError: If the backend answers with a non-success status
        """
        try:
            response = await self._send("DELETE", self._item_path(entity_id))
            if not response.is_success:
                raise self._transport_error("deleting", response, include_body=True)
        except Exception as e:
            logger.error(
                f"Error deleting {self.entity_name} with id {entity_id}: {e}",
                extra=self._log_context("DELETE", self._item_path(entity_id), e),
            )
            raise

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _item_path(self, entity_id: int) -> str:
        return f"{self.path}/{entity_id}"

    def _endpoint(self, path: str) -> str:
        return str(self._client.base_url.join(path))

    def _log_context(self, method: str, path: str, exc: Optional[Exception] = None) -> Dict[str, Any]:
        return {
            "resource": self.resource.value,
            "method": method,
            "endpoint": self._endpoint(path),
            "status_code": getattr(exc, "status_code", None),
        }

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        if not self._is_online():
            raise ConnectivityError(self._endpoint(path))
        return await self._client.request(method, path, **kwargs)

    async def _write(self, method: str, path: str, entity: EntityT, action: str) -> EntityT:
        payload = self.normalizer.to_wire(entity)
        logger.debug(
            f"{method} {self.entity_name} at {self._endpoint(path)}",
            extra={"payload": payload, **self._log_context(method, path)},
        )

        response = await self._send(method, path, json=payload, headers=self.write_headers)
        if not response.is_success:
            raise self._transport_error(action, response, include_body=True)

        stored = unwrap_entity(_decode_body(response))
        if stored is None:
            raise GatewayError(
                f"Backend returned no {self.entity_name} after {action} (API URL: {self._endpoint(path)})"
            )
        return self.normalizer.to_domain(stored)

    def _transport_error(
        self,
        action: str,
        response: httpx.Response,
        plural: bool = False,
        include_body: bool = False,
    ) -> TransportError:
        body = (response.text or None) if include_body else None

        return TransportError(
            status_code=response.status_code,
            status_text=response.reason_phrase,
            body=body,
            endpoint=str(response.request.url),
            method=response.request.method,
            action=action,
            resource=self.resource.value if plural else self.entity_name,
        )


class CustomerRepository(ResourceRepository[Customer]):
    """Repository for customers."""

    resource = Resource.CUSTOMERS
    entity_name = "customer"

    def _default_normalizer(self) -> CustomerNormalizer:
        return CustomerNormalizer()


class TableRepository(ResourceRepository[Table]):
    """Repository for dining tables."""

    resource = Resource.TABLES
    entity_name = "table"

    def _default_normalizer(self) -> TableNormalizer:
        return TableNormalizer()


class ReservationRepository(ResourceRepository[Reservation]):
    """Repository for reservations. Writes also ask for a JSON response."""

    resource = Resource.RESERVATIONS
    entity_name = "reservation"
    write_headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

    def _default_normalizer(self) -> ReservationNormalizer:
        return ReservationNormalizer()
