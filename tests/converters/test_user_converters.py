from collections.abc import Callable

from partnerfinder.converters import user as user_converters
from partnerfinder.models.user import User
from partnerfinder.models.utils import GeoCoords


def test_user_to_public_hides_password(
    user_factory: Callable[..., User],
):
    user = user_factory(location_lat=52.37, location_lng=4.89, sports=["padel"])

    user_public = user_converters.to_public(user)

    assert user_public.id == user.id
    assert user_public.location_coords == GeoCoords(lat=52.37, lng=4.89)
    assert user_public.sports == ["padel"]
    assert "hashedPassword" not in user_public.model_dump(by_alias=True)
    assert "fullName" in user_public.model_dump(by_alias=True)


def test_coords_need_both_parts():
    assert user_converters.to_coords(None, 4.0) is None
    assert user_converters.to_coords(1.0, None) is None
    assert user_converters.to_coords(1.0, 4.0) == GeoCoords(lat=1.0, lng=4.0)
