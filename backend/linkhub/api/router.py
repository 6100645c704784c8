from fastapi import APIRouter

from linkhub.api.routes import imports

api_router = APIRouter()
api_router.include_router(imports.router, tags=['imports'])
