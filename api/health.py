"""
Health check route.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request

from database.session import ping

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> Dict[str, Any]:
    connected = await ping(request.app.state.engine)
    return {
        "success": True,
        "status": "OK",
        "message": "Splito auth backend is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if connected else "disconnected",
        "endpoints": {
            "register": "POST /api/auth/register",
            "login": "POST /api/auth/login",
            "profile": "GET /api/auth/profile",
            "health": "GET /api/health",
        },
    }
