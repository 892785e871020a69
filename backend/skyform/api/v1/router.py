#To aggregate all routes for API v1


from fastapi import APIRouter

from skyform.api.v1.routes.airports import router as airports_router
from skyform.api.v1.routes.search import router as search_router
from skyform.api.v1.routes.sessions import router as sessions_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(airports_router, prefix="/airports", tags=["airports"])
api_router.include_router(search_router, prefix="/search", tags=["search"])
api_router.include_router(sessions_router, prefix="/sessions", tags=["sessions"])
