"""
Q&A Forum Backend - Shared Response Schemas
=============================================

What:  Envelope models shared by every resource.

Envelope convention:
    success → {"message": ...}, {"data": ...} or both
    error   → {"message": ...} only
"""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Body of write endpoints that do not echo a row."""
    message: str = Field(description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """
    Body of every 4xx/5xx response.

    Example:
        {"message": "Question not found."}
    """
    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
