# movie_portal/models/common.py

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every error response."""
    success: bool = False
    message: str


class HealthResponse(BaseModel):
    status: str = "ok"


class DatabaseHealthResponse(HealthResponse):
    database: str
