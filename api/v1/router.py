# api/v1/router.py
from fastapi import APIRouter

from . import menus

api_router = APIRouter()

api_router.include_router(menus.router, prefix="/menus", tags=["Menus"])
