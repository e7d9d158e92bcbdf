from __future__ import annotations

import asyncio

import httpx
import pytest

from collabsync.adapters.collaboration import HttpCollaborationClient
from collabsync.config import ApiConfig
from collabsync.domain.errors import RemoteRejectedError
from collabsync.domain.model import Collaboration, InvitableIdentity
from tests.helpers.http import RecordingTransport, json_response, plain_resilience


def _client(api_config: ApiConfig, transport: RecordingTransport) -> HttpCollaborationClient:
    return HttpCollaborationClient(
        config=api_config,
        resilience=plain_resilience("collaboration"),
        client_factory=transport.factory,
    )


def test_search_invitable_queries_scope(api_config: ApiConfig) -> None:
    transport = RecordingTransport(
        json_response(
            [
                {
                    "_id": "u1",
                    "preferredEmail": "john@example.org",
                    "firstname": "John",
                    "lastname": "Doe",
                    "domains": [],
                },
                {"_id": "u2", "preferredEmail": "jane@example.org"},
            ]
        )
    )

    async def run() -> list[InvitableIdentity]:
        async with _client(api_config, transport) as client:
            return await client.search_invitable("community", "c1", search="j", limit=5)

    found = asyncio.run(run())

    [request] = transport.requests
    assert request.url.path == "/api/collaborations/community/c1/invitablepeople"
    assert dict(request.url.params) == {"search": "j", "limit": "5"}
    assert [(item.id, item.firstname) for item in found] == [("u1", "John"), ("u2", None)]
    assert found[1].preferred_email == "jane@example.org"


def test_search_invitable_with_empty_body(api_config: ApiConfig) -> None:
    transport = RecordingTransport(lambda request: httpx.Response(200))

    async def run() -> list[InvitableIdentity]:
        async with _client(api_config, transport) as client:
            return await client.search_invitable("community", "c1", search="j", limit=5)

    assert asyncio.run(run()) == []


def test_search_invitable_rejects_malformed_payload(api_config: ApiConfig) -> None:
    transport = RecordingTransport(json_response([{"firstname": "no id"}]))

    async def run() -> list[InvitableIdentity]:
        async with _client(api_config, transport) as client:
            return await client.search_invitable("community", "c1", search="j", limit=5)

    with pytest.raises(RemoteRejectedError, match="unexpected payload"):
        asyncio.run(run())


def test_get_collaboration(api_config: ApiConfig) -> None:
    transport = RecordingTransport(
        json_response({"_id": "c1", "objectType": "community", "creator": "123", "managers": []})
    )

    async def run() -> Collaboration:
        async with _client(api_config, transport) as client:
            return await client.get_collaboration("community", "c1")

    collaboration = asyncio.run(run())

    assert transport.requests[0].url.path == "/api/collaborations/community/c1"
    assert collaboration == Collaboration(id="c1", object_type="community", creator="123")


def test_request_membership_uses_put(api_config: ApiConfig) -> None:
    transport = RecordingTransport(lambda request: httpx.Response(204))

    async def run() -> None:
        async with _client(api_config, transport) as client:
            await client.request_membership("community", "c1", "u1")

    asyncio.run(run())

    [request] = transport.requests
    assert request.method == "PUT"
    assert request.url.path == "/api/collaborations/community/c1/membership/u1"


def test_rejected_membership_carries_payload(api_config: ApiConfig) -> None:
    payload = {"error": 403, "message": "Forbidden", "details": "Not a manager"}
    transport = RecordingTransport(json_response(payload, status_code=403))

    async def run() -> None:
        async with _client(api_config, transport) as client:
            await client.request_membership("community", "c1", "u1")

    with pytest.raises(RemoteRejectedError) as excinfo:
        asyncio.run(run())
    assert excinfo.value.status_code == 403
    assert excinfo.value.payload == payload
