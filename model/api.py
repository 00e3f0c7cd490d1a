# model/api.py
from datetime import datetime
from pydantic import BaseModel, Field
from util.constants import Limits


class EncodeRequest(BaseModel):
    id: str = Field(min_length=1, max_length=Limits.ID_MAX, pattern=Limits.ID_PATTERN)
    text: str = Field(min_length=1, max_length=Limits.TEXT_MAX)


class EncodeResponse(BaseModel):
    success: bool


class QueryRequest(BaseModel):
    prompt: str = Field(min_length=1, max_length=Limits.PROMPT_MAX)


class QueryResponse(BaseModel):
    id: str
    text: str
    qrCode: str
    score: float
    createdAt: datetime


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
    message: str
