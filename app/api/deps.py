# app/api/deps.py
from typing import AsyncGenerator

import httpx
from fastapi import Depends, Request

from app.core.config import Settings
from app.core.database import Database
from app.crud.transaction import TransactionStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    """The process-wide connection pool owned by the application lifespan."""
    return request.app.state.database


def get_transaction_store(database: Database = Depends(get_database)) -> TransactionStore:
    return TransactionStore(database)


async def get_api_client(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """
    HTTP client the page uses to talk to the transactions API:
    - API_BASE_URL when configured
    - otherwise this application, in-process
    """
    if settings.API_BASE_URL:
        client = httpx.AsyncClient(base_url=settings.API_BASE_URL, timeout=30.0)
    else:
        client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=request.app),
            base_url=str(request.base_url),
        )
    async with client:
        yield client
