"""Tests for the community feed: posting, upvotes, comments, moderation."""
from __future__ import annotations

from conftest import PNG


def test_create_post_multipart(client):
    resp = client.post(
        "/community",
        data={"caption": "Flooded underpass", "userId": "D1", "address": "River Rd"},
        files={"image": ("flood.png", PNG, "image/png")},
    )
    assert resp.status_code == 201
    post = resp.json()
    assert post["caption"] == "Flooded underpass"
    assert post["userId"] == "D1"
    assert post["deviceId"] == "D1"
    assert post["imageUrl"].startswith("http://testserver/uploads/")
    assert post["upvotes"] == []
    assert post["comments"] == []
    assert "status" not in post


def test_create_post_requires_image(client):
    resp = client.post("/community", json={"caption": "x", "userId": "D1"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "image is required"}


def test_create_post_requires_author(client):
    resp = client.post("/community", json={"caption": "x", "imageUrl": "http://cdn.example.com/x.jpg"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "deviceId is required"}


def test_upvote_twice_keeps_one_entry(client, post_id):
    first = client.put(f"/community/{post_id}/upvote", json={"deviceId": "D2"})
    second = client.put(f"/community/{post_id}/upvote", json={"deviceId": "D2"})
    assert first.status_code == 200
    assert second.status_code == 200
    assert second.json()["upvotes"] == ["D2"]


def test_upvote_many_times_and_devices(client, post_id):
    for _ in range(5):
        client.post(f"/community/{post_id}/upvote", json={"deviceId": "D2"})
    # older clients send the device id as userId
    resp = client.post(f"/community/{post_id}/upvote", json={"userId": "D3"})
    assert resp.json()["upvotes"] == ["D2", "D3"]


def test_upvote_requires_device(client, post_id):
    resp = client.put(f"/community/{post_id}/upvote", json={})
    assert resp.status_code == 400
    assert client.get(f"/community/{post_id}").json()["upvotes"] == []


def test_upvote_unknown_post_is_404(client):
    resp = client.put("/community/999/upvote", json={"deviceId": "D2"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Post not found"}


def test_comments_keep_creation_order(client, post_id):
    texts = ["first", "second", "third"]
    for i, text in enumerate(texts):
        client.post(f"/community/{post_id}/comment", json={"deviceId": f"D{i}", "text": text})
    # upvoting does not disturb comments
    client.put(f"/community/{post_id}/upvote", json={"deviceId": "D9"})
    comments = client.get(f"/community/{post_id}").json()["comments"]
    assert [c["text"] for c in comments] == texts
    assert [c["deviceId"] for c in comments] == ["D0", "D1", "D2"]


def test_legacy_comment_field(client, post_id):
    resp = client.post(f"/community/{post_id}/comment", json={"deviceId": "D2", "comment": "nice catch"})
    assert resp.status_code == 200
    assert resp.json()["comments"][0]["text"] == "nice catch"


def test_blank_comment_rejected(client, post_id):
    resp = client.post(f"/community/{post_id}/comment", json={"deviceId": "D2", "text": " "})
    assert resp.status_code == 400
    assert client.get(f"/community/{post_id}").json()["comments"] == []


def test_delete_post(client, post_id):
    resp = client.delete(f"/community/{post_id}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Community post deleted successfully"}
    assert client.get("/community").json() == []
    assert client.delete(f"/community/{post_id}").status_code == 404


def test_deleting_mirrored_post_keeps_report(client, submit):
    submit(mirror=True)
    post = client.get("/community").json()[0]
    client.delete(f"/community/{post['id']}")
    reports = client.get("/reports").json()
    assert len(reports) == 1
    assert reports[0]["community"] is True


def test_list_posts_newest_first(client):
    for caption in ["a", "b", "c"]:
        client.post("/community", json={
            "caption": caption, "deviceId": "D1", "imageUrl": "http://cdn.example.com/x.jpg",
        })
    assert [p["caption"] for p in client.get("/community").json()] == ["c", "b", "a"]
