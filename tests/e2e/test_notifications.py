"""End-to-end tests for notification fan-out and unread badges."""


class TestNotificationFlow:
    """Threads, responses and follows feeding the notification list."""

    def test_reply_and_mention_notifications(self, api):
        api.login("alice")
        thread_id = api.create_thread(title="Assay design")

        api.login("bob")
        reply = api.client.post(
            f"/threads/{thread_id}/responses",
            json={"body": "@alice nice, looping in @carol and @carol"},
        )
        assert reply.status_code == 201
        assert reply.json()["notified_count"] == 2

        api.login("alice")
        alice_list = api.client.get("/notifications").json()
        api.login("carol")
        carol_list = api.client.get("/notifications").json()

        assert [n["type"] for n in alice_list["notifications"]] == ["reply"]
        assert alice_list["unread_count"] == 1
        assert [n["type"] for n in carol_list["notifications"]] == ["mention"]
        assert carol_list["notifications"][0]["thread_id"] == thread_id

    def test_mark_read_then_mark_all_read(self, api):
        api.login("bob")
        api.client.post(f"/users/{api.id('alice')}/follow")
        api.login("carol")
        api.client.post(f"/users/{api.id('alice')}/follow")

        api.login("alice")
        listed = api.client.get("/notifications").json()
        first_id = listed["notifications"][0]["notification_id"]

        one = api.client.post(f"/notifications/{first_id}/read")
        again = api.client.post(f"/notifications/{first_id}/read")
        rest = api.client.post("/notifications/read-all")

        assert one.json() == {"marked_read": True, "unread_count": 1}
        assert again.json() == {"marked_read": False, "unread_count": 1}
        assert rest.json() == {"marked_read": 1, "unread_count": 0}
        counts = api.client.get("/notifications/unread-count").json()
        assert counts["unread_count"] == 0

    def test_unread_filter_and_limit(self, api):
        for handle in ("bob", "carol"):
            api.login(handle)
            api.client.post(f"/users/{api.id('alice')}/follow")

        api.login("alice")
        first_id = api.client.get("/notifications").json()["notifications"][0][
            "notification_id"
        ]
        api.client.post(f"/notifications/{first_id}/read")

        unread = api.client.get("/notifications", params={"unread": "1"}).json()
        limited = api.client.get("/notifications", params={"limit": 0}).json()

        assert len(unread["notifications"]) == 1
        assert len(limited["notifications"]) == 1

    def test_direct_messages_stay_out_of_notifications(self, api):
        api.login("bob")
        api.client.post(f"/chats/{api.id('alice')}", json={"body": "hello"})

        api.login("alice")
        listed = api.client.get("/notifications").json()
        counts = api.client.get("/notifications/unread-count").json()

        assert listed["notifications"] == []
        assert counts == {"unread_count": 0, "unread_messages": 1}

    def test_notifications_require_auth(self, api):
        assert api.client.get("/notifications").status_code == 401
        assert api.client.post("/notifications/read-all").status_code == 401


class TestFollowEndpoints:
    """Follow and unfollow routes."""

    def test_double_follow_notifies_once(self, api):
        api.login("bob")
        first = api.client.post(f"/users/{api.id('alice')}/follow")
        second = api.client.post(f"/users/{api.id('alice')}/follow")

        assert first.json()["changed"] is True
        assert second.json() == {
            "user_id": api.id("alice"),
            "following": True,
            "changed": False,
        }

        api.login("alice")
        types = [n["type"] for n in api.client.get("/notifications").json()["notifications"]]
        assert types == ["follow"]

    def test_unfollow(self, api):
        api.login("bob")
        api.client.post(f"/users/{api.id('alice')}/follow")

        response = api.client.delete(f"/users/{api.id('alice')}/follow")

        assert response.json()["following"] is False
        assert response.json()["changed"] is True

    def test_follow_self_rejected(self, api):
        api.login("bob")

        assert api.client.post(f"/users/{api.id('bob')}/follow").status_code == 400
