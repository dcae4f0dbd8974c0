from fastapi import APIRouter
from api import seller_api
api_router = APIRouter()


api_router.include_router(seller_api.router)
