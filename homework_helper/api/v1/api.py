# homework_helper/api/v1/api.py
from fastapi import APIRouter
from .endpoints import homework

api_router = APIRouter()
api_router.include_router(homework.router, prefix="/homework", tags=["Homework"])
