"""End-to-end tests for vote endpoints."""

from uuid import uuid4

import pytest


class TestVoteEndpoints:
    """Vote and score routes."""

    def test_vote_flip_scenario(self, api):
        api.login("alice")
        thread_id = api.create_thread()

        api.login("bob")
        first = api.client.post(f"/threads/{thread_id}/vote", json={"value": 1})
        flipped = api.client.post(f"/threads/{thread_id}/vote", json={"value": -1})
        api.login("carol")
        third = api.client.post(f"/threads/{thread_id}/vote", json={"value": 1})

        assert first.status_code == 200
        assert (first.json()["upvotes"], first.json()["downvotes"]) == (1, 0)
        assert first.json()["viewer_vote"] == 1
        assert flipped.json()["score"] == -1
        assert flipped.json()["viewer_vote"] == -1
        assert (third.json()["upvotes"], third.json()["downvotes"]) == (1, 1)
        assert third.json()["viewer_vote"] == 1

    def test_score_is_public(self, api):
        api.login("alice")
        thread_id = api.create_thread()
        api.client.post(f"/threads/{thread_id}/vote", json={"value": 1})

        api.logout()
        response = api.client.get(f"/threads/{thread_id}/score")

        assert response.status_code == 200
        assert response.json()["score"] == 1
        assert response.json()["viewer_vote"] == 0

    def test_vote_on_response(self, api):
        api.login("alice")
        thread_id = api.create_thread()
        reply = api.client.post(f"/threads/{thread_id}/responses", json={"body": "Reply"})
        response_id = reply.json()["response_id"]

        api.login("bob")
        response = api.client.post(f"/responses/{response_id}/vote", json={"value": -1})

        assert response.status_code == 200
        assert response.json()["downvotes"] == 1
        assert api.client.get(f"/responses/{response_id}/score").json()["viewer_vote"] == -1

    @pytest.mark.parametrize("value", [0, 2, True, "1", None, 1.5])
    def test_invalid_vote_value(self, api, value):
        api.login("alice")
        thread_id = api.create_thread()

        response = api.client.post(f"/threads/{thread_id}/vote", json={"value": value})

        assert response.status_code == 400

    def test_vote_requires_auth(self, api):
        response = api.client.post(f"/threads/{uuid4()}/vote", json={"value": 1})

        assert response.status_code == 401

    def test_vote_on_missing_thread(self, api):
        api.login("alice")

        response = api.client.post(f"/threads/{uuid4()}/vote", json={"value": 1})

        assert response.status_code == 404

    def test_malformed_id(self, api):
        api.login("alice")

        response = api.client.post("/threads/not-a-uuid/vote", json={"value": 1})

        assert response.status_code == 400
