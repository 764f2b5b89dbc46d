import asyncio
import os
from datetime import date, datetime, timedelta

os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eventeye.main import app
from eventeye.database import Base, get_db
from eventeye.controller.auth_controller import sign_up
from eventeye.controller.profile_controller import create_profile
from eventeye.controller.workspace import WorkspaceRegistry
from eventeye.models.event_model import Event
from eventeye.schema.event_schema import CatalogEvent, OrganizerSummary
from eventeye.schema.profile_schema import OrganizerFields, SponsorFields

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.workspaces = WorkspaceRegistry()
    yield TestClient(app)
    app.dependency_overrides.clear()


def run(coro):
    return asyncio.run(coro)


def make_organizer(db, email="club@uni.edu", club_name="Robotics Club", college="State University",
                   full_name="Olivia Organizer"):
    user = run(sign_up(db, email, "secret-pass", full_name, "organizer"))
    return run(create_profile(
        db, user, "organizer", full_name,
        organizer=OrganizerFields(club_name=club_name, college=college, description="We build robots"),
    ))


def make_sponsor(db, email="brand@corp.com", company_name="Acme Corp", industry="Technology",
                 marketing_goals=("AI", "Recruiting"), full_name="Sam Sponsor"):
    user = run(sign_up(db, email, "secret-pass", full_name, "sponsor"))
    return run(create_profile(
        db, user, "sponsor", full_name,
        sponsor=SponsorFields(company_name=company_name, industry=industry,
                              marketing_goals=list(marketing_goals)),
    ))


def make_event(db, organizer, name="Tech Summit", description="A day of talks", location="Boston, MA",
               themes=("AI", "Robotics"), status="published", view_count=0, audience_size=200,
               minutes=0):
    event = Event(
        organizer_id=organizer.extension.id,
        name=name,
        description=description,
        event_date=date(2025, 6, 1),
        location=location,
        themes=list(themes),
        status=status,
        view_count=view_count,
        audience_size=audience_size,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def catalog_event(id, name="Event", description="", club_name="Club", college="College",
                  location="Boston", themes=(), view_count=0, audience_size=None):
    return CatalogEvent(
        id=id,
        organizer_id="org-1",
        name=name,
        description=description,
        event_date=date(2025, 6, 1),
        location=location,
        audience_size=audience_size,
        themes=list(themes),
        status="published",
        view_count=view_count,
        created_at=BASE_TIME,
        organizer=OrganizerSummary(club_name=club_name, college=college),
    )


def auth_headers(client, email, password="secret-pass"):
    response = client.post("/auth/signin", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    token = response.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}
