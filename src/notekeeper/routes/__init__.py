from fastapi import APIRouter

from . import auth, categories, comments, notes

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(categories.router)
api_router.include_router(notes.router)
api_router.include_router(comments.router)
