"""Member routes — roster CRUD, banned list, cascade on delete and bulk edit."""

DAY = "2026-03-05"


async def _toggle(client, member_id, track="offline"):
    res = await client.post("/api/v1/ledger/mutations", json={
        "kind": "toggle", "date_key": DAY, "member_id": member_id, "slot": 0, "track": track,
    })
    assert res.json()["applied"] is True


async def test_add_member_assigns_id_when_missing(client):
    res = await client.post("/api/v1/members", json={"name": "Alice", "joined_at": "2026-01-10"})
    assert res.status_code == 200
    body = res.json()
    assert body["applied"] is True
    assert len(body["members"][0]["id"]) == 36


async def test_unprivileged_add_is_noop(anon_client):
    res = await anon_client.post("/api/v1/members", json={"name": "Alice", "joined_at": "2026-01-10"})
    assert res.status_code == 200
    assert res.json() == {"applied": False, "members": []}


async def test_banned_name_cannot_join(client):
    res = await client.post("/api/v1/banned", json={"name": "Mallory", "reason": "spam"})
    assert res.json()["banned"][0]["name"] == "Mallory"
    res = await client.post("/api/v1/members", json={"name": "Mallory", "joined_at": "2026-01-10"})
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "BANNED_NAME"


async def test_duplicate_id_is_409(client, seed):
    await seed("Alice")
    res = await client.post("/api/v1/members", json={"id": "alice", "name": "Other", "joined_at": "2026-01-10"})
    assert res.status_code == 409


async def test_rename_keeps_history(client, seed):
    await seed("Alice")
    for name in ("Ally", "Al", "A", "Alicia"):
        res = await client.patch("/api/v1/members/alice", json={"name": name})
        assert res.status_code == 200
    member = res.json()["members"][0]
    assert member["name"] == "Alicia"
    assert member["previous_names"] == ["A", "Al", "Ally"]


async def test_patch_unknown_member_is_404(client):
    res = await client.patch("/api/v1/members/nobody", json={"is_staff": True})
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_members_listed_leaders_then_staff(client, seed):
    await seed("Cara", "Bob", "Alice")
    await client.patch("/api/v1/members/cara", json={"is_leader": True})
    await client.patch("/api/v1/members/bob", json={"is_staff": True})
    members = (await client.get("/api/v1/members")).json()["members"]
    assert [m["id"] for m in members] == ["cara", "bob", "alice"]


async def test_delete_member_cascades_to_attendance(client, seed):
    await seed("Alice", "Bob")
    await _toggle(client, "alice")
    await _toggle(client, "alice", track="online")
    await _toggle(client, "bob")

    res = await client.delete("/api/v1/members/alice")
    assert [m["id"] for m in res.json()["members"]] == ["bob"]

    day = (await client.get(f"/api/v1/ledger/days/{DAY}")).json()
    assert list(day["offline"]["attendance"]) == ["bob"]
    assert day["online"]["attendance"] == {}


async def test_delete_unknown_member_is_404(client):
    res = await client.delete("/api/v1/members/nobody")
    assert res.status_code == 404


async def test_bulk_update_drops_and_cascades(client, seed):
    await seed("Alice", "Bob")
    await _toggle(client, "bob")
    res = await client.put("/api/v1/members", json=[
        {"id": "alice", "name": "Ally", "joined_at": "2026-01-10", "is_staff": True},
    ])
    members = res.json()["members"]
    assert [(m["id"], m["name"], m["previous_names"]) for m in members] == [
        ("alice", "Ally", ["Alice"]),
    ]
    day = (await client.get(f"/api/v1/ledger/days/{DAY}")).json()
    assert day["offline"]["attendance"] == {}


async def test_unban(client):
    res = await client.post("/api/v1/banned", json={"id": "b1", "name": "Mallory"})
    assert res.json()["banned"][0]["banned_at"]
    res = await client.delete("/api/v1/banned/b1")
    assert res.json() == {"applied": True, "banned": []}
    res = await client.delete("/api/v1/banned/b1")
    assert res.status_code == 404


async def test_blank_name_is_validation_error(client):
    res = await client.post("/api/v1/members", json={"name": "  ", "joined_at": "2026-01-10"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
