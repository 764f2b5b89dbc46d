from datetime import datetime, timedelta

from eventeye.main import app
from eventeye.models.user_model import AuthSession

from conftest import auth_headers


def signup_with_profile(client, email, role, extension):
    client.post("/auth/signup", json={"email": email, "password": "secret-pass", "full_name": "Someone", "role": role})
    headers = auth_headers(client, email)
    response = client.post("/profile/setup", headers=headers, json={
        "role": role, "full_name": "Someone", role: extension,
    })
    assert response.status_code == 200, response.text
    return headers


def organizer_with_events(client):
    headers = signup_with_profile(client, "club@uni.edu", "organizer",
                                  {"club_name": "Robotics Club", "college": "MIT"})
    ids = []
    for name, themes, location in (("Tech Summit", "AI, Robotics", "Cambridge, MA"),
                                   ("Art Fair", "Design", "Providence, RI")):
        created = client.post("/event/add", headers=headers, json={
            "name": name, "description": f"{name} description", "event_date": "2025-05-01",
            "location": location, "themes": themes, "audience_size": "120",
        })
        assert created.json()["data"]["status"] == "draft"
        ids.append(created.json()["data"]["id"])
    return headers, ids


def test_organizer_dashboard_flow(client):
    headers, (summit_id, fair_id) = organizer_with_events(client)

    assert client.get("/event/published", headers=headers).json()["data"] == []
    published = client.put(f"/event/publish/{summit_id}", headers=headers)
    assert published.json()["data"]["status"] == "published"

    catalog = client.get("/event/published", headers=headers).json()["data"]
    assert [e["id"] for e in catalog] == [summit_id]
    assert catalog[0]["organizer"] == {"club_name": "Robotics Club", "college": "MIT"}

    client.post(f"/event/view/{summit_id}", headers=headers)
    stats = client.get("/event/stats", headers=headers).json()["data"]
    assert stats == {"total_events": 2, "total_views": 1, "published": 1, "drafts": 1}

    assert client.delete(f"/event/{summit_id}", headers=headers).status_code == 403
    assert client.delete(f"/event/{fair_id}", headers=headers).status_code == 200


def test_sponsor_workspace_flow(client):
    org_headers, (summit_id, fair_id) = organizer_with_events(client)
    client.put(f"/event/publish/{summit_id}", headers=org_headers)
    client.put(f"/event/publish/{fair_id}", headers=org_headers)

    headers = signup_with_profile(client, "brand@corp.com", "sponsor", {
        "company_name": "Acme", "industry": "Technology", "marketing_goals": "AI, Hiring",
    })

    events = client.get("/workspace/events", headers=headers).json()["data"]["events"]
    assert {e["id"] for e in events} == {summit_id, fair_id}

    filtered = client.get("/workspace/events", headers=headers, params={"theme": "Design"}).json()["data"]
    assert [e["id"] for e in filtered["events"]] == [fair_id]
    assert filtered["filters"]["theme"] == "Design"

    options = client.get("/workspace/options", headers=headers).json()["data"]
    assert set(options["themes"]) == {"AI", "Robotics", "Design"}

    cleared = client.get("/workspace/events", headers=headers).json()["data"]
    assert cleared["filters"]["theme"] == ""

    toggled = client.post(f"/workspace/interests/{summit_id}/toggle", headers=headers).json()
    assert toggled["data"]["interested"] is True
    assert toggled["message"] == "Added to interests"
    assert client.get("/workspace/interests", headers=headers).json()["data"] == [summit_id]

    toggled = client.post(f"/workspace/interests/{summit_id}/toggle", headers=headers).json()
    assert toggled["data"]["interested"] is False
    assert toggled["message"] == "Removed from interests"

    first = client.post(f"/workspace/events/{summit_id}/view", headers=headers).json()["data"]
    second = client.post(f"/workspace/events/{summit_id}/view", headers=headers).json()["data"]
    assert second["view_count"] == first["view_count"] + 1

    recs = client.get("/workspace/recommendations", headers=headers).json()["data"]
    assert [e["id"] for e in recs] == [summit_id]

    missing = client.post("/workspace/events/nope/view", headers=headers)
    assert missing.status_code == 404


def test_organizer_cannot_open_workspace(client):
    headers, _ = organizer_with_events(client)
    response = client.get("/workspace/events", headers=headers)
    assert response.status_code == 404
    assert response.json()["message"] == "You need to be a sponsor to express interest"


def test_messages_and_sponsor_directory(client):
    org_headers, (summit_id, _) = organizer_with_events(client)
    headers = signup_with_profile(client, "brand@corp.com", "sponsor",
                                  {"company_name": "Acme", "industry": "Technology"})

    directory = client.get("/explore/sponsors", headers=org_headers, params={"search": "acme"}).json()["data"]
    assert [s["company_name"] for s in directory["sponsors"]] == ["Acme"]
    assert directory["industries"] == ["Technology"]

    organizer_profile = client.get("/profile/me", headers=org_headers).json()["data"]["profile"]
    sent = client.post("/message/send", headers=headers, json={
        "recipient_id": organizer_profile["id"], "content": "Interested in sponsoring", "event_id": summit_id,
    })
    assert sent.status_code == 200
    assert client.get("/message/unread", headers=org_headers).json()["data"]["unread"] == 1

    inbox = client.get("/message/inbox", headers=org_headers).json()["data"]
    read = client.put(f"/message/read/{inbox[0]['id']}", headers=org_headers).json()["data"]
    assert read["read_at"] is not None


def test_requests_without_token_are_rejected(client):
    assert client.get("/event/published").status_code == 401
    assert client.get("/workspace/events").status_code == 401


def test_organizer_sees_interested_sponsors_after_refresh(client):
    org_headers, (summit_id, _) = organizer_with_events(client)
    headers = signup_with_profile(client, "brand@corp.com", "sponsor",
                                  {"company_name": "Acme", "industry": "Technology"})

    assert client.get("/workspace/stats", headers=headers).json()["data"]["available_events"] == 0
    client.put(f"/event/publish/{summit_id}", headers=org_headers)

    refreshed = client.post("/workspace/refresh", headers=headers).json()["data"]
    assert [e["id"] for e in refreshed["events"]] == [summit_id]
    client.post(f"/workspace/interests/{summit_id}/toggle", headers=headers)

    stats = client.get("/workspace/stats", headers=headers).json()["data"]
    assert stats["available_events"] == 1
    assert stats["interests"] == 1

    interests = client.get(f"/event/interests/{summit_id}", headers=org_headers).json()["data"]
    assert [i["event_id"] for i in interests] == [summit_id]
    assert client.get(f"/event/interests/{summit_id}", headers=headers).status_code == 403


def test_expired_session_releases_its_workspace(client, session_factory):
    headers = signup_with_profile(client, "brand@corp.com", "sponsor",
                                  {"company_name": "Acme", "industry": "Technology"})
    assert client.get("/workspace/events", headers=headers).status_code == 200
    assert len(app.state.workspaces) == 1

    db = session_factory()
    db.query(AuthSession).update({AuthSession.expires_at: datetime.utcnow() - timedelta(minutes=1)})
    db.commit()
    db.close()

    assert client.get("/workspace/events", headers=headers).status_code == 401
    assert len(app.state.workspaces) == 0
