from collections.abc import Callable
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from partnerfinder.core.config import settings
from partnerfinder.models.user import User

EVENTS = f"{settings.API_V1_STR}/events"


@pytest.fixture
def event_id(
    client: TestClient,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> str:
    owner = user_factory()
    r = client.post(
        EVENTS,
        headers=auth_headers(owner),
        json={
            "title": "Saturday singles",
            "sport": "badminton",
            "startsAt": "2030-06-01T10:00:00Z",
            "locationName": "Sports hall",
            "locationCoords": {"lat": 52.1, "lng": 5.1},
            "maxParticipants": 6,
        },
    )
    assert r.status_code == 201
    return r.json()["event"]["id"]


def test_create_and_list_events(
    client: TestClient,
    event_id: str,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    viewer = user_factory()

    events = client.get(EVENTS, headers=auth_headers(viewer)).json()["events"]

    assert [e["id"] for e in events] == [event_id]
    assert events[0]["participantsCount"] == 1
    assert events[0]["joined"] is False
    assert events[0]["owner"] is False
    assert events[0]["visibility"] == "public"


def test_create_event_validation(
    client: TestClient,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    r = client.post(
        EVENTS,
        headers=auth_headers(user_factory()),
        json={"title": "", "startsAt": "2030-06-01T10:00:00Z"},
    )

    assert r.status_code == 422


def test_share_and_stop_live_location(
    client: TestClient,
    event_id: str,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    alice = user_factory()
    bob = user_factory()
    for user in (alice, bob):
        joined = client.post(f"{EVENTS}/{event_id}/join", headers=auth_headers(user))
        assert joined.status_code == 200
        assert joined.json()["event"]["joined"] is True

    r = client.put(
        f"{EVENTS}/{event_id}/live-location",
        headers=auth_headers(alice),
        json={"lat": 52.09, "lng": 5.12, "accuracy": 8.5, "heading": None, "speed": 0},
    )
    assert r.status_code == 200

    seen_by_bob = client.get(
        f"{EVENTS}/{event_id}/live-locations", headers=auth_headers(bob)
    ).json()["locations"]
    assert len(seen_by_bob) == 1
    assert seen_by_bob[0]["userId"] == str(alice.id)
    assert seen_by_bob[0]["username"] == alice.username
    assert seen_by_bob[0]["isMe"] is False
    assert seen_by_bob[0]["updatedAt"]

    seen_by_alice = client.get(
        f"{EVENTS}/{event_id}/live-locations", headers=auth_headers(alice)
    ).json()["locations"]
    assert seen_by_alice[0]["isMe"] is True

    stopped = client.delete(f"{EVENTS}/{event_id}/live-location", headers=auth_headers(alice))
    assert stopped.status_code == 200
    after = client.get(f"{EVENTS}/{event_id}/live-locations", headers=auth_headers(bob))
    assert after.json() == {"locations": []}


@pytest.mark.parametrize(
    "body",
    [
        {"lat": 95, "lng": 0},
        {"lat": -90.5, "lng": 0},
        {"lat": 0, "lng": 181},
        {"lat": 0, "lng": 0, "accuracy": -1},
    ],
)
def test_live_location_out_of_range(
    client: TestClient,
    event_id: str,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
    body: dict[str, float],
) -> None:
    user = user_factory()
    client.post(f"{EVENTS}/{event_id}/join", headers=auth_headers(user))

    r = client.put(f"{EVENTS}/{event_id}/live-location", headers=auth_headers(user), json=body)

    assert r.status_code == 422
    listed = client.get(f"{EVENTS}/{event_id}/live-locations", headers=auth_headers(user))
    assert listed.json() == {"locations": []}


def test_live_location_requires_membership(
    client: TestClient,
    event_id: str,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    outsider = user_factory()

    put = client.put(
        f"{EVENTS}/{event_id}/live-location",
        headers=auth_headers(outsider),
        json={"lat": 1, "lng": 1},
    )
    get = client.get(f"{EVENTS}/{event_id}/live-locations", headers=auth_headers(outsider))
    missing = client.get(f"{EVENTS}/{uuid4()}/live-locations", headers=auth_headers(outsider))

    assert put.status_code == 403
    assert get.status_code == 403
    assert missing.status_code == 404


def test_leave_event(
    client: TestClient,
    event_id: str,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    user = user_factory()
    headers = auth_headers(user)
    client.post(f"{EVENTS}/{event_id}/join", headers=headers)

    r = client.post(f"{EVENTS}/{event_id}/leave", headers=headers)

    assert r.status_code == 200
    assert r.json()["event"]["joined"] is False
    assert r.json()["event"]["participantsCount"] == 1
