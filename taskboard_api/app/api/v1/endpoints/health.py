"""Liveness probe, served outside the API prefix."""

from typing import Dict

from fastapi import APIRouter


router = APIRouter()


@router.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}
