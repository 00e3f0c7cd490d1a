# controller/entry_controller.py
import asyncio
from typing import Awaitable, TypeVar
from fastapi import APIRouter, Depends, status
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from controller.controller_dependencies import (
    get_registration_service,
    get_retrieval_service,
)
from model.api import EncodeRequest, EncodeResponse, QueryRequest, QueryResponse
from service.registration_service import RegistrationService
from service.retrieval_service import RetrievalService
from util.constants import InternalURIs
from util.enums import ErrorMessage
from util.errors import AppError
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

entry_router = APIRouter(
    dependencies=(
        [
            Depends(
                RateLimiter(
                    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
                )
            )
        ]
        if settings.RATE_LIMIT_ENABLED
        else []
    )
)


async def _bounded(op: Awaitable[T], name: str) -> T:
    try:
        return await asyncio.wait_for(op, timeout=settings.REQUEST_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        logger.error("%s.timeout after=%.1fs", name, settings.REQUEST_TIMEOUT_SECONDS)
        raise AppError.of(ErrorMessage.TIMEOUT.value)


@entry_router.post(
    InternalURIs.ENCODE,
    response_model=EncodeResponse,
    status_code=status.HTTP_200_OK,
)
async def encode(
    payload: EncodeRequest,
    service: RegistrationService = Depends(get_registration_service),
) -> EncodeResponse:
    await _bounded(service.register(payload.id, payload.text), "encode")
    return EncodeResponse(success=True)


@entry_router.post(InternalURIs.QUERY, response_model=QueryResponse)
async def query(
    payload: QueryRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> QueryResponse:
    result = await _bounded(service.query(payload.prompt), "query")
    if result is None:
        raise AppError.of(ErrorMessage.NO_MATCH.value)
    return QueryResponse(
        id=result.id,
        text=result.text,
        qrCode=result.artifact.decode("utf-8"),
        score=result.score,
        createdAt=result.created_at,
    )
