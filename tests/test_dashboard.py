from datetime import timedelta

from admin_console.services.supabase_client import GatewayError


def _seed(gateway):
    gateway.seed("profiles", {"id": "u1"}, {"id": "u2"}, {"id": "u3"})
    gateway.seed(
        "photo_moderation_queue",
        {"id": "p1", "status": "pending"},
        {"id": "p2", "status": "approved"},
    )
    gateway.seed(
        "user_subscriptions",
        {"id": "s1", "status": "active"},
        {"id": "s2", "status": "active"},
        {"id": "s3", "status": "cancelled"},
    )
    gateway.seed(
        "moderation_actions",
        {"id": "m1", "created_at": "2026-10-19T08:00:00+00:00"},
        {"id": "m2", "created_at": "2026-10-18T13:00:00+00:00"},
        {"id": "m3", "created_at": "2026-10-17T12:00:00+00:00"},
    )


def test_summary_counts(client, gateway, fixed_now):
    _seed(gateway)

    res = client.get("/api/dashboard/summary")

    assert res.status_code == 200
    body = res.json()
    assert body["total_users"] == 3
    assert body["pending_photos"] == 1
    assert body["active_subscriptions"] == 2
    assert body["recent_actions"] == 2
    assert body["failed"] == []


def test_recent_actions_window_is_24_hours(client, gateway, fixed_now):
    _seed(gateway)

    client.get("/api/dashboard/summary")

    counts = {table: args for _, table, args in gateway.ops("count")}
    since = (fixed_now - timedelta(hours=24)).isoformat()
    assert counts["moderation_actions"]["gte"] == {"created_at": since}
    assert counts["photo_moderation_queue"]["eq"] == {"status": "pending"}
    assert counts["user_subscriptions"]["eq"] == {"status": "active"}
    assert counts["profiles"]["eq"] is None


def test_one_failed_count_does_not_hide_the_others(client, gateway):
    _seed(gateway)
    gateway.fail("count", "user_subscriptions", GatewayError("statement timeout"))

    res = client.get("/api/dashboard/summary")

    assert res.status_code == 200
    body = res.json()
    assert body["active_subscriptions"] == 0
    assert body["failed"] == ["active_subscriptions"]
    assert body["total_users"] == 3


def test_every_count_failing_is_an_error(client, gateway):
    for table in ("profiles", "photo_moderation_queue", "user_subscriptions", "moderation_actions"):
        gateway.fail("count", table, GatewayError("JWT expired"))

    res = client.get("/api/dashboard/summary")

    assert res.status_code == 502
    assert res.json()["detail"] == {"message": "Failed to load dashboard", "detail": "JWT expired"}


def test_empty_backend_is_all_zeros(client):
    body = client.get("/api/dashboard/summary").json()

    assert (body["total_users"], body["pending_photos"], body["active_subscriptions"], body["recent_actions"]) == (0, 0, 0, 0)
