"""
User management API routes

Paths and verbs match the clients already in the field, including the
mutating GET on /delete/{user_id}. DELETE is accepted there as well.
"""

import logging
from typing import List

import asyncpg
from fastapi import APIRouter, Depends, Request

from user_service.database.connection import get_db_pool
from user_service.models.user import User, NewUser, UpdateUser, GenericResponse
from user_service.services.users_service import UserService

router = APIRouter()
logger = logging.getLogger(__name__)


def get_users_service(
    request: Request,
    pool: asyncpg.Pool = Depends(get_db_pool),
) -> UserService:
    return UserService(
        pool,
        reread_mode=request.app.state.reread_mode,
        acquire_timeout=request.app.state.acquire_timeout,
    )


@router.get("/get", response_model=GenericResponse[List[User]])
async def get_users(users_service: UserService = Depends(get_users_service)):
    """List every user"""
    users = await users_service.list_users()
    return GenericResponse[List[User]](message="Users Fetched successfully", data=users)


@router.get("/get/{user_id}", response_model=GenericResponse[User])
async def get_user(
    user_id: str,
    users_service: UserService = Depends(get_users_service)
):
    """Fetch one user by public identifier"""
    user = await users_service.get_user(user_id)
    return GenericResponse[User](message="User fetched successfully", data=user)


@router.post("/add", response_model=GenericResponse[List[User]])
async def add_user(
    request: NewUser,
    users_service: UserService = Depends(get_users_service)
):
    """Create a user"""
    users = await users_service.add_user(request)
    return GenericResponse[List[User]](message="Users added successfully", data=users)


@router.post("/update/{user_id}", response_model=GenericResponse[List[User]])
async def update_user(
    user_id: str,
    request: UpdateUser,
    users_service: UserService = Depends(get_users_service)
):
    """Update the fields present in the body; the rest are left as stored"""
    users = await users_service.update_user(user_id, request)
    return GenericResponse[List[User]](message="Users updated successfully", data=users)


@router.api_route("/delete/{user_id}", methods=["GET", "DELETE"], response_model=GenericResponse[List[User]])
async def delete_user(
    user_id: str,
    users_service: UserService = Depends(get_users_service)
):
    """Delete a user by public identifier"""
    users = await users_service.delete_user(user_id)
    return GenericResponse[List[User]](message="Users Deleted successfully", data=users)
