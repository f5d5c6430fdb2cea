"""
Users API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from core.responses import respond

from . import dependencies, schemas, service
from .repository import UserRepository

router = APIRouter()


@router.post("/users")
async def create_user(
    request: schemas.UserWriteRequest,
    repo: UserRepository = Depends(dependencies.get_user_repository),
) -> JSONResponse:
    result = await service.create_user(repo, request)
    return respond(result, status_code=status.HTTP_201_CREATED, message="Data inserted")


@router.get("/users")
async def list_users(
    repo: UserRepository = Depends(dependencies.get_user_repository),
) -> JSONResponse:
    result = await service.list_users(repo)
    return respond(result, message="Get all users data")


@router.get("/users/{user_id}")
async def get_user(
    user_id: int,
    repo: UserRepository = Depends(dependencies.get_user_repository),
) -> JSONResponse:
    result = await service.get_user(repo, user_id)
    return respond(result, message="Get data successfully")


@router.put("/users/{user_id}")
async def update_user(
    user_id: int,
    request: schemas.UserWriteRequest,
    repo: UserRepository = Depends(dependencies.get_user_repository),
) -> JSONResponse:
    result = await service.update_user(repo, user_id, request)
    return respond(result, message="user data updated")


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: int,
    repo: UserRepository = Depends(dependencies.get_user_repository),
) -> JSONResponse:
    result = await service.delete_user(repo, user_id)
    return respond(result, message="user is deleted successfully")
