"""Suggestion routes — anyone posts, only the admin deletes."""


async def _post(client, content, author=""):
    res = await client.post("/api/v1/suggestions", json={"content": content, "author": author})
    assert res.status_code == 200, res.text
    return res.json()


async def test_anyone_can_post_and_newest_comes_first(anon_client):
    await _post(anon_client, "Snacks please", "Bob")
    body = await _post(anon_client, "  More chess nights  ")
    assert body["applied"] is True
    board = body["suggestions"]
    assert [s["content"] for s in board] == ["More chess nights", "Snacks please"]
    assert board[0]["author"] == "Anonymous"
    assert board[1]["author"] == "Bob"
    assert all(s["id"] and s["created_at"] for s in board)


async def test_posts_are_persisted(anon_client):
    await _post(anon_client, "Snacks please")
    listed = (await anon_client.get("/api/v1/suggestions")).json()
    assert [s["content"] for s in listed["suggestions"]] == ["Snacks please"]
    record = (await anon_client.get("/api/v1/records/suggestions")).json()
    assert record["version"] == 1


async def test_blank_content_is_400(anon_client):
    res = await anon_client.post("/api/v1/suggestions", json={"content": "   "})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_admin_deletes(client):
    board = (await _post(client, "Snacks please"))["suggestions"]
    res = await client.delete(f"/api/v1/suggestions/{board[0]['id']}")
    assert res.status_code == 200
    assert res.json() == {"applied": True, "suggestions": []}


async def test_unprivileged_delete_is_noop(client, anon_client):
    board = (await _post(anon_client, "Snacks please"))["suggestions"]
    res = await anon_client.delete(f"/api/v1/suggestions/{board[0]['id']}")
    assert res.status_code == 200
    assert res.json()["applied"] is False
    listed = (await client.get("/api/v1/suggestions")).json()["suggestions"]
    assert len(listed) == 1


async def test_delete_unknown_is_404(client):
    res = await client.delete("/api/v1/suggestions/missing")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
