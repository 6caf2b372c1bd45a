"""API routes."""

from fastapi import APIRouter

from resume_enhancer.api.routes import auth, credentials, enhancements, files, health, resumes

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(resumes.router, prefix="/resumes", tags=["resumes"])
api_router.include_router(enhancements.router, tags=["enhancements"])
api_router.include_router(files.router, tags=["files"])
api_router.include_router(credentials.router, tags=["settings"])
