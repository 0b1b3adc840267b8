from admin_console.services.supabase_client import GatewayError


def _profile(uid, name, email, created, banned=False, verified=False):
    return {
        "id": uid,
        "display_name": name,
        "email": email,
        "is_banned": banned,
        "is_verified": verified,
        "created_at": created,
    }


def _seed(gateway):
    gateway.seed(
        "profiles",
        _profile("u1", "Jordan Lee", "jordan@example.com", "2026-10-01T00:00:00+00:00", verified=True),
        _profile("u2", "Casey", "CASEY@mail.test", "2026-10-05T00:00:00+00:00"),
        _profile("u3", None, None, "2026-10-03T00:00:00+00:00", banned=True, verified=True),
    )


def test_list_newest_first_with_badges(client, gateway):
    _seed(gateway)

    body = client.get("/api/users").json()

    assert [u["id"] for u in body["items"]] == ["u2", "u3", "u1"]
    badges = {u["id"]: u["badge"] for u in body["items"]}
    assert badges == {"u1": "Verified", "u2": "Active", "u3": "Banned"}
    args = gateway.ops("select")[0][2]
    assert args["order"] == "created_at" and args["desc"] is True and args["limit"] == 100


def test_search_is_case_insensitive_on_name_or_email(client, gateway):
    _seed(gateway)

    assert [u["id"] for u in client.get("/api/users", params={"search": "JORDAN"}).json()["items"]] == ["u1"]
    assert [u["id"] for u in client.get("/api/users", params={"search": "mail.TEST"}).json()["items"]] == ["u2"]

    body = client.get("/api/users", params={"search": "zzz"}).json()
    assert body["items"] == []
    assert body["fetched"] == 3
    assert body["empty_message"] == "No users found"


def test_blank_search_returns_everything(client, gateway):
    _seed(gateway)

    assert len(client.get("/api/users", params={"search": "   "}).json()["items"]) == 3


def test_ban_requires_confirmation(client, gateway):
    _seed(gateway)

    res = client.post("/api/users/u2/ban")
    assert res.status_code == 400
    assert res.json()["detail"]["message"] == "confirmation_required"
    assert gateway.ops("rpc") == []


def test_ban_calls_procedure_and_shows_banned(client, gateway):
    _seed(gateway)

    res = client.post("/api/users/u2/ban", json={"confirm": True, "admin_notes": "spam"})

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "User banned successfully"
    assert gateway.ops("rpc") == [("rpc", "ban_user", {
        "target_user_id": "u2",
        "ban_reason": "Banned by admin",
        "admin_notes": "spam",
    })]
    badge = {u["id"]: u["badge"] for u in body["items"]}["u2"]
    assert badge == "Banned"


def test_unban_needs_no_confirmation(client, gateway):
    _seed(gateway)

    res = client.post("/api/users/u3/unban")

    assert res.status_code == 200
    assert res.json()["message"] == "User unbanned successfully"
    _, name, params = gateway.ops("rpc")[0]
    assert name == "unban_user"
    assert params == {"target_user_id": "u3", "unban_reason": "Unbanned by admin", "admin_notes": None}
    badge = {u["id"]: u["badge"] for u in res.json()["items"]}["u3"]
    assert badge == "Verified"


def test_procedure_error_is_passed_through(client, gateway):
    _seed(gateway)
    gateway.fail("rpc", "ban_user", GatewayError("Only super admins can ban users", "P0001"))

    res = client.post("/api/users/u2/ban", json={"confirm": True})

    assert res.status_code == 502
    assert res.json()["detail"] == {
        "message": "Failed to ban user",
        "detail": "Only super admins can ban users",
    }
    assert gateway.tables["profiles"][1]["is_banned"] is False


def test_refetch_failure_after_ban(client, gateway):
    _seed(gateway)
    gateway.fail("select", "profiles", GatewayError("timeout"))

    res = client.post("/api/users/u2/ban", json={"confirm": True})

    assert res.status_code == 502
    assert res.json()["detail"]["message"] == "Failed to load users"
    assert res.json()["detail"]["done"] == "User banned successfully"
    assert len(gateway.ops("rpc")) == 1
