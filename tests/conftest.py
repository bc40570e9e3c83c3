"""Pytest configuration and fixtures for gateway tests."""
import itertools
import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio

from gateway.client import create_http_client
from gateway.repositories import CustomerRepository, ReservationRepository, TableRepository
from notifications.queue import NotificationQueue
from notifications.scheduling import VirtualClock


BASE_URL = "http://testserver/api"


class FakeBackend:
    """
    In-memory REST backend speaking the Spanish wire format.

    Reservations are returned with their ``mesa`` and ``comensal`` relations
    embedded when the referenced records exist, like an eager-loading API.
    """

    def __init__(self, wrap: bool = True):
        self.wrap = wrap
        self.collections: Dict[str, Dict[int, Dict[str, Any]]] = {
            "customers": {},
            "tables": {},
            "reservations": {},
        }
        self.requests: List[httpx.Request] = []
        self._ids = itertools.count(1)

    def seed(self, resource: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Store a record as if it had been created through the API."""
        stored = {**record, "id": next(self._ids)}
        self.collections[resource][stored["id"]] = stored
        return stored

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        parts = request.url.path.strip("/").split("/")[1:]  # drop "api"
        collection = self.collections.get(parts[0]) if parts else None
        if collection is None:
            return httpx.Response(404, json={"message": "Unknown resource"})
        resource = parts[0]

        if len(parts) == 1:
            if request.method == "GET":
                items = [self._present(resource, record) for record in collection.values()]
                return httpx.Response(200, json=self._envelope(items))
            if request.method == "POST":
                body = json.loads(request.content)
                body.pop("id", None)
                stored = self.seed(resource, body)
                return httpx.Response(201, json=self._envelope(self._present(resource, stored)))
            return httpx.Response(405)

        item_id = int(parts[1])
        record = collection.get(item_id)
        if record is None:
            return httpx.Response(404, json={"message": "Not found"})

        if request.method == "GET":
            return httpx.Response(200, json=self._envelope(self._present(resource, record)))
        if request.method == "PUT":
            body = json.loads(request.content)
            stored = {**body, "id": item_id}
            collection[item_id] = stored
            return httpx.Response(200, json=self._envelope(self._present(resource, stored)))
        if request.method == "DELETE":
            del collection[item_id]
            return httpx.Response(204)
        return httpx.Response(405)

    def _envelope(self, payload: Any) -> Any:
        return {"data": payload} if self.wrap else payload

    def _present(self, resource: str, record: Dict[str, Any]) -> Dict[str, Any]:
        if resource != "reservations":
            return dict(record)

        presented = dict(record)
        mesa = self.collections["tables"].get(record.get("mesa_id"))
        if mesa is not None:
            presented["mesa"] = dict(mesa)
        comensal = self.collections["customers"].get(record.get("comensal_id"))
        if comensal is not None:
            presented["comensal"] = dict(comensal)
        return presented


@pytest.fixture(scope="function")
def backend():
    """Provide an empty fake backend."""
    return FakeBackend()


@pytest_asyncio.fixture(scope="function")
async def http_client(backend):
    """Async client routed to the fake backend."""
    client = create_http_client(base_url=BASE_URL, transport=httpx.MockTransport(backend.handler))
    yield client
    await client.aclose()


@pytest_asyncio.fixture(scope="function")
async def client_factory():
    """Factory fixture building clients around a custom request handler."""
    clients: List[httpx.AsyncClient] = []

    def _create(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        client = create_http_client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _create
    for client in clients:
        await client.aclose()


@pytest.fixture(scope="function")
def responding():
    """Factory for handlers that always return the same response."""
    def _responding(
        status_code: int,
        json_body: Optional[Any] = None,
        text: Optional[str] = None,
        seen: Optional[List[httpx.Request]] = None,
    ) -> Callable[[httpx.Request], httpx.Response]:
        def handler(request: httpx.Request) -> httpx.Response:
            if seen is not None:
                seen.append(request)
            if json_body is not None:
                return httpx.Response(status_code, json=json_body)
            return httpx.Response(status_code, text=text or "")
        return handler
    return _responding


@pytest.fixture(scope="function")
def customer_repository(http_client):
    return CustomerRepository(http_client)


@pytest.fixture(scope="function")
def table_repository(http_client):
    return TableRepository(http_client)


@pytest.fixture(scope="function")
def reservation_repository(http_client):
    return ReservationRepository(http_client)


@pytest.fixture(scope="function")
def clock():
    """Provide a manually advanced clock."""
    return VirtualClock()


@pytest.fixture(scope="function")
def notification_queue(clock):
    """Notification queue whose timers run on the virtual clock."""
    return NotificationQueue(scheduler=clock, default_timeout_ms=5000)


@pytest.fixture(scope="function")
def sample_customer_wire():
    """Customer record in the backend's field names."""
    return {
        "nombre": "Lucía Fernández",
        "correo": "lucia@example.com",
        "telefono": "+34600111222",
        "direccion": "Calle Mayor 1, Madrid",
    }


@pytest.fixture(scope="function")
def sample_table_wire():
    """Table record in the backend's field names."""
    return {"numero_mesa": "A1", "capacidad": 4, "ubicacion": "Terraza"}
