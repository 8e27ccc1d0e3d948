from fastapi import APIRouter

from partnerfinder.api.routes import (
    auth,
    events,
    friends,
    me,
    partners,
    utils,
)

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(me.router)
api_router.include_router(partners.router)
api_router.include_router(friends.router)
api_router.include_router(events.router)
api_router.include_router(utils.router)
