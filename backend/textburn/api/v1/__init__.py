from fastapi import APIRouter
from textburn.api.v1.routes_jobs import router as jobs_router
from textburn.api.v1.routes_videos import router as videos_router

api_router = APIRouter()
api_router.include_router(videos_router, prefix="", tags=["videos"])
api_router.include_router(jobs_router, prefix="", tags=["jobs"])
