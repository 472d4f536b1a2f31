"""
Health check API route
"""

from fastapi import APIRouter

from user_service.models.user import GenericResponse

router = APIRouter()


@router.get("/", response_model=GenericResponse[None])
async def health_check():
    """Liveness check; does not touch the database"""
    return GenericResponse[None](message="Working")
