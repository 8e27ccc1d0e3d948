from collections.abc import Callable

from pytest_mock import MockerFixture
from sqlmodel import Session

from partnerfinder.models.user import User
from partnerfinder.services import friends as friends_services
from partnerfinder.services import partners as partners_services


def test_find_partners_normalizes_terms(
    mocker: MockerFixture,
):
    mock_search = mocker.patch("partnerfinder.crud.user.search_partners", return_value=[])
    mock_session = mocker.MagicMock()
    requester_id = mocker.sentinel.requester_id

    result = partners_services.find_partners(
        session=mock_session,
        requester_id=requester_id,
        query="  ann ",
        skill=None,
        location="   ",
    )

    assert result == []
    mock_search.assert_called_once_with(
        session=mock_session,
        requester_id=requester_id,
        query="ann",
        skill="",
        location="",
        limit=50,
    )


def test_find_partners_caps_limit(
    mocker: MockerFixture,
):
    mock_search = mocker.patch("partnerfinder.crud.user.search_partners", return_value=[])
    mocker.patch.object(partners_services.settings, "PARTNER_SEARCH_LIMIT", 5)

    partners_services.find_partners(
        session=mocker.MagicMock(), requester_id=mocker.sentinel.requester_id, limit=500
    )
    assert mock_search.call_args.kwargs["limit"] == 5

    partners_services.find_partners(
        session=mocker.MagicMock(), requester_id=mocker.sentinel.requester_id, limit=2
    )
    assert mock_search.call_args.kwargs["limit"] == 2


def test_requested_user_disappears_from_search(
    *,
    db_transaction: Session,
    user_factory: Callable[..., User],
):
    alice = user_factory()
    bob = user_factory()

    before = partners_services.find_partners(session=db_transaction, requester_id=alice.id)
    assert [user.id for user in before] == [bob.id]

    friends_services.request_relationship(
        session=db_transaction, requester_id=alice.id, target_id=bob.id
    )

    assert partners_services.find_partners(session=db_transaction, requester_id=alice.id) == []
    assert partners_services.find_partners(session=db_transaction, requester_id=bob.id) == []
