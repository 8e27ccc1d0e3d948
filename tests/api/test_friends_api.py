from collections.abc import Callable
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from partnerfinder.core.config import settings
from partnerfinder.models.relationship import UserRelationship
from partnerfinder.models.user import User

FRIENDS = f"{settings.API_V1_STR}/friends"


def test_request_then_accept(
    client: TestClient,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    alice = user_factory()
    bob = user_factory()

    r = client.post(
        f"{FRIENDS}/request", headers=auth_headers(alice), json={"userId": str(bob.id)}
    )
    assert r.status_code == 201
    assert r.json() == {"status": "pending"}

    requests = client.get(f"{FRIENDS}/requests", headers=auth_headers(bob)).json()["requests"]
    assert len(requests) == 1
    assert requests[0]["from"]["id"] == str(alice.id)
    assert requests[0]["createdAt"]

    accepted = client.post(
        f"{FRIENDS}/accept", headers=auth_headers(bob), json={"userId": str(alice.id)}
    )
    assert accepted.status_code == 200
    assert accepted.json() == {"status": "accepted"}

    alice_friends = client.get(FRIENDS, headers=auth_headers(alice)).json()["friends"]
    bob_friends = client.get(FRIENDS, headers=auth_headers(bob)).json()["friends"]
    assert [f["id"] for f in alice_friends] == [str(bob.id)]
    assert [f["id"] for f in bob_friends] == [str(alice.id)]
    assert client.get(f"{FRIENDS}/requests", headers=auth_headers(bob)).json() == {
        "requests": []
    }

    status = client.get(f"{FRIENDS}/status/{alice.id}", headers=auth_headers(bob)).json()
    assert status == {"status": "accepted", "canMessage": True}


def test_repeated_request_keeps_single_record(
    client: TestClient,
    db_transaction: Session,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    alice = user_factory()
    bob = user_factory()
    headers = auth_headers(alice)

    first = client.post(f"{FRIENDS}/request", headers=headers, json={"userId": str(bob.id)})
    second = client.post(f"{FRIENDS}/request", headers=headers, json={"userId": str(bob.id)})

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json() == {"status": "pending"}
    records = db_transaction.exec(select(UserRelationship)).all()
    assert len(records) == 1
    assert records[0].status == "pending"
    assert records[0].version == 1


def test_request_validation(
    client: TestClient,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    alice = user_factory()
    headers = auth_headers(alice)

    missing = client.post(f"{FRIENDS}/request", headers=headers, json={})
    blank = client.post(f"{FRIENDS}/request", headers=headers, json={"userId": "   "})
    invalid = client.post(f"{FRIENDS}/request", headers=headers, json={"userId": "nope"})
    unknown = client.post(f"{FRIENDS}/request", headers=headers, json={"userId": str(uuid4())})
    self_request = client.post(
        f"{FRIENDS}/request", headers=headers, json={"userId": f" {alice.id} "}
    )

    assert missing.status_code == 400
    assert blank.status_code == 400
    assert invalid.status_code == 400
    assert unknown.status_code == 404
    assert self_request.status_code == 400


def test_friend_routes_without_body(
    client: TestClient,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    headers = auth_headers(user_factory())

    request = client.post(f"{FRIENDS}/request", headers=headers)
    accept = client.post(f"{FRIENDS}/accept", headers=headers)

    assert request.status_code == 400
    assert accept.status_code == 400
    assert "userId" in request.json()["detail"]


def test_accept_errors(
    client: TestClient,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    alice = user_factory()
    bob = user_factory()

    none = client.post(
        f"{FRIENDS}/accept", headers=auth_headers(bob), json={"userId": str(alice.id)}
    )
    assert none.status_code == 404

    client.post(f"{FRIENDS}/request", headers=auth_headers(alice), json={"userId": str(bob.id)})
    own = client.post(
        f"{FRIENDS}/accept", headers=auth_headers(alice), json={"userId": str(bob.id)}
    )
    assert own.status_code == 403


def test_find_partner(
    client: TestClient,
    user_factory: Callable[..., User],
    auth_headers: Callable[[User], dict[str, str]],
) -> None:
    alice = user_factory()
    bob = user_factory(skill="beginner", location="Rotterdam")
    user_factory(skill="advanced", location="Rotterdam")

    r = client.get(
        f"{settings.API_V1_STR}/partners/find-partner",
        headers=auth_headers(alice),
        params={"skill": " Beginner ", "location": "rotter"},
    )

    assert r.status_code == 200
    assert [p["id"] for p in r.json()["partners"]] == [str(bob.id)]
