from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkhub.api.router import api_router
from linkhub.core.config import settings
from linkhub.core.logging import configure_logging
from linkhub.db.init_db import init_db

configure_logging()

app = FastAPI(title=settings.app_name, version='0.1.0')

app.add_middleware(
    CORSMiddleware,
    allow_origins=['*'],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(api_router, prefix=settings.api_v1_prefix)


@app.on_event('startup')
def startup() -> None:
    init_db()


@app.get('/health')
def health() -> dict:
    return {'status': 'ok'}
