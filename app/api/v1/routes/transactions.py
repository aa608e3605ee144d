# app/api/v1/routes/transactions.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from app.api.deps import get_settings, get_transaction_store
from app.core.config import Settings
from app.crud.transaction import TransactionStore
from app.schemas.transaction import (
    CandidateError,
    TransactionCandidate,
    TransactionEnvelope,
    TransactionListEnvelope,
    TransactionRead,
    build_transaction,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])


def server_error(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": "Internal server error",
            "message": str(exc),
        },
    )


@router.get("", response_model=TransactionListEnvelope)
async def read_transactions(store: TransactionStore = Depends(get_transaction_store)):
    try:
        transactions = await store.list_all()
    except Exception as e:
        logger.error(f"API Error listing transactions: {str(e)}")
        return server_error(e)
    return TransactionListEnvelope(
        data=[TransactionRead.model_validate(tx) for tx in transactions]
    )


@router.post("", response_model=TransactionEnvelope, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    candidate: TransactionCandidate,
    store: TransactionStore = Depends(get_transaction_store),
    settings: Settings = Depends(get_settings),
):
    try:
        tx_in = build_transaction(candidate, strict=settings.STRICT_VALIDATION)
    except CandidateError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        created = await store.create(tx_in)
    except Exception as e:
        logger.error(f"API Error creating transaction: {str(e)}")
        return server_error(e)
    logger.info(f"Created {created!r}")
    return TransactionEnvelope(data=TransactionRead.model_validate(created))
