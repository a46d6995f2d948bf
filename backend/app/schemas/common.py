"""
StoreGate API - Shared Schemas
===============================

What:  Login, service metadata, health and error envelopes.

Error envelope (every non-2xx JSON response):
    {
        "error": "missing_fields",                  machine-readable code
        "message": "Campos requeridos faltantes",   localized
        "details": {"missing_fields": ["precio"]},  optional
        "timestamp": "2024-01-15T12:00:00.000Z",
        "request_id": "a1b2c3d4"
    }
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.services.auth import Principal


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(BaseModel):
    token: str
    usuario: Principal
    timestamp: str


class ServiceInfo(BaseModel):
    mensaje: str
    version: str
    timestamp: str
    rutasPublicas: List[str]
    rutasProtegidas: List[str]


class MemoryStats(BaseModel):
    rss: int = Field(description="Resident set size in bytes")
    vms: int = Field(description="Virtual memory size in bytes")
    percent: float = Field(description="RSS as a percentage of total system memory")


class HealthResponse(BaseModel):
    status: str = Field(description="Always OK while the process is serving")
    uptime: float = Field(description="Seconds since the process started")
    memory: MemoryStats
    version: str
    timestamp: str


class ErrorResponse(BaseModel):
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Localized error description")
    details: Optional[Dict[str, Any]] = Field(default=None)
    timestamp: str
    request_id: Optional[str] = Field(default=None)
