"""End-to-end tests for the feed endpoint."""


class TestFeedEndpoint:
    """Feed listing, sorting and scopes."""

    def test_top_and_discussed(self, api):
        api.login("alice")
        quiet = api.create_thread(title="quiet")
        popular = api.create_thread(title="popular")
        busy = api.create_thread(title="busy")
        for body in ("one", "two"):
            api.client.post(f"/threads/{busy}/responses", json={"body": body})

        for handle in ("bob", "carol"):
            api.login(handle)
            api.client.post(f"/threads/{popular}/vote", json={"value": 1})
        api.client.post(f"/threads/{quiet}/vote", json={"value": -1})

        top = api.client.get("/feed", params={"sort": "top"}).json()
        discussed = api.client.get("/feed", params={"sort": "discussed"}).json()

        assert [item["title"] for item in top["items"]] == ["popular", "busy", "quiet"]
        assert top["items"][0]["score"] == 2
        assert top["items"][0]["viewer_vote"] == 1
        assert discussed["items"][0]["title"] == "busy"
        assert discussed["items"][0]["response_count"] == 2

    def test_following_scope(self, api):
        api.login("alice")
        api.create_thread(title="by alice")
        api.login("carol")
        api.create_thread(title="by carol")

        api.login("bob")
        assert api.client.get("/feed", params={"scope": "following"}).json()["items"] == []

        api.client.post(f"/users/{api.id('alice')}/follow")
        feed = api.client.get("/feed", params={"scope": "following"}).json()

        assert [item["title"] for item in feed["items"]] == ["by alice"]

    def test_search_and_page(self, api):
        api.login("alice")
        for i in range(3):
            api.create_thread(title=f"Enzyme kinetics {i}")
        api.create_thread(title="Something else")

        api.logout()
        feed = api.client.get("/feed", params={"search": "enzyme", "limit": 2}).json()

        assert feed["total"] == 3
        assert len(feed["items"]) == 2

    def test_invalid_sort(self, api):
        assert api.client.get("/feed", params={"sort": "hot"}).status_code == 422
