"""Fixtures for API route tests.

The app runs against the mock container; the in-memory store is shared by
every request made through one client, so a test can write through one
endpoint and read the result through another.
"""

import asyncio
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from pinboard.config import Settings
from pinboard.domain.model import User
from pinboard.domain.service import JWTService
from pinboard.domain.value import Handle, UserId
from pinboard.interface.api.app import create_app
from pinboard.persistence.repository.inmemory import InMemoryStore
from tests.di import build_test_container

HANDLES = ("alice", "bob", "carol")


class Api:
    """Test client with seeded users and cookie-based login."""

    def __init__(self, client: TestClient, users: dict[str, User]) -> None:
        self.client = client
        self.users = users
        self._jwt = JWTService(Settings().auth)

    def id(self, handle: str) -> str:
        return str(self.users[handle].id)

    def login(self, handle: str) -> None:
        user = self.users[handle]
        token = self._jwt.create_token(str(user.id), user.handle.root)
        self.client.cookies.set("auth_token", token)

    def logout(self) -> None:
        self.client.cookies.clear()

    def create_thread(self, title: str = "A thread", body: str = "Some body") -> str:
        response = self.client.post("/threads", json={"title": title, "body": body})
        assert response.status_code == 201, response.text
        return response.json()["thread_id"]


@pytest.fixture
def api():
    """App client with alice, bob and carol already registered."""
    container = build_test_container(with_fastapi=True)
    store = asyncio.run(container.get(InMemoryStore))
    users = {}
    for handle in HANDLES:
        user = User(id=UserId(uuid4()), handle=Handle(root=handle), name=handle.title())
        store.users.append(user)
        users[handle] = user

    with TestClient(create_app(container=container)) as client:
        yield Api(client, users)
