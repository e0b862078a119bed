"""
Shared fixtures: an in-memory JSONPlaceholder served through httpx.MockTransport.
"""

import asyncio
import json
import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from profile_fetcher.api.client import APIClient


USERS = {
    1: {
        "id": 1,
        "name": "Leanne Graham",
        "username": "Bret",
        "email": "Sincere@april.biz",
        "address": {"street": "Kulas Light", "city": "Gwenborough"},
        "phone": "1-770-736-8031 x56442",
        "company": {"name": "Romaguera-Crona", "bs": "harness real-time e-markets"},
    },
    2: {
        "id": 2,
        "name": "Ervin Howell",
        "username": "Antonette",
        "email": "Shanna@melissa.tv",
        "address": {"city": "Wisokyburgh"},
        "company": {"name": "Deckow-Crist"},
    },
    3: {
        "id": 3,
        "name": "Clementine Bauch",
        "username": "Samantha",
        "email": "Nathan@yesenia.net",
        "address": {"city": "McKenziehaven"},
        "company": {"name": "Romaguera-Jacobson"},
    },
}

POST_COUNTS = {1: 7, 2: 2, 3: 4}

POSTS = [
    {
        "id": index,
        "userId": user_id,
        "title": f"post {n} by user {user_id}",
        "body": f"body of post {n}" + (" about promises" if n == 0 else ""),
    }
    for index, (user_id, n) in enumerate(
        ((user_id, n) for user_id, count in POST_COUNTS.items() for n in range(count)),
        start=1,
    )
]

TODOS = [
    {"id": 1, "userId": 1, "title": "a", "completed": True},
    {"id": 2, "userId": 1, "title": "b", "completed": False},
    {"id": 3, "userId": 1, "title": "c", "completed": True},
]


def _json(status_code, data):
    return httpx.Response(status_code, json=data)


def make_handler(latency=0.0, status_override=None, requests=None):
    """
    Build an async MockTransport handler for the fake API.

    Args:
        latency: Seconds each request takes.
        status_override: If set, every request answers with this status.
        requests: Optional list that receives every request seen.
    """
    async def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if latency:
            await asyncio.sleep(latency)
        if status_override is not None:
            return _json(status_override, {})

        parts = request.url.path.strip("/").split("/")
        params = request.url.params

        # Like JSONPlaceholder, an empty id lists every user
        if parts == ["users"]:
            return _json(200, list(USERS.values()))

        if parts[0] == "users" and len(parts) == 2:
            try:
                user = USERS.get(int(parts[1]))
            except ValueError:
                user = None
            return _json(200, user) if user else _json(404, {})

        if parts == ["posts"] and request.method == "POST":
            payload = json.loads(request.content)
            return _json(201, {**payload, "id": 101})

        if parts == ["posts"]:
            if "userId" in params:
                return _json(200, [p for p in POSTS if str(p["userId"]) == params["userId"]])
            return _json(200, POSTS)

        if parts == ["todos"]:
            return _json(200, [t for t in TODOS if str(t["userId"]) == params.get("userId")])

        return _json(404, {})

    return handler


@pytest.fixture
def make_client():
    """Factory for APIClient instances backed by the fake API."""
    def factory(latency=0.0, count_delay=0.0, status_override=None, requests=None):
        transport = httpx.MockTransport(
            make_handler(latency, status_override, requests)
        )
        return APIClient(
            base_url="https://api.test",
            transport=transport,
            count_delay=count_delay,
        )
    return factory


@pytest.fixture
def client(make_client):
    """An APIClient with no simulated latency."""
    return make_client()
