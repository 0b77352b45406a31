"""
API endpoints for users and their favorite cities.

Full replace (PUT) and sparse update (PATCH) are distinct operations: PUT
takes the complete state of a user and reconciles its favorites, PATCH takes
a sparse JSON document in which absent and null keys leave the stored values
alone.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, Request, Response, status

from cityprefs.core.models.io import FavoriteCityRead, UserCreate, UserRead, UserReplace
from cityprefs.core.models.io.users import UserFields
from cityprefs.server.services.deps import UserServiceDep

from .patch_body import merge_patch_body

router = APIRouter(tags=["users"])


@router.get(
    "",
    response_model=List[UserRead],
    summary="List Users",
    description="List all users ordered by ID, with optional pagination.",
)
async def list_users(
    service: UserServiceDep,
    limit: Optional[int] = Query(default=None, ge=1),
    offset: Optional[int] = Query(default=None, ge=0),
) -> List[UserRead]:
    users = await service.find_all(limit=limit, offset=offset)
    return [UserRead.from_domain(user) for user in users]


@router.get(
    "/name/like/{fragment}",
    response_model=List[UserRead],
    summary="Search Users by Name",
    description="List users whose username contains the fragment, ignoring case.",
)
async def search_users(fragment: str, service: UserServiceDep) -> List[UserRead]:
    users = await service.find_by_name_containing(fragment)
    return [UserRead.from_domain(user) for user in users]


@router.get(
    "/name/{username}",
    response_model=UserRead,
    summary="Get User by Name",
    description="Retrieve a user by its username, ignoring case.",
    responses={404: {"description": "User not found"}},
)
async def get_user_by_name(username: str, service: UserServiceDep) -> UserRead:
    return UserRead.from_domain(await service.find_by_name(username))


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get User",
    description="Retrieve a user by ID, with its favorite cities.",
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: int, service: UserServiceDep) -> UserRead:
    return UserRead.from_domain(await service.find_by_id(user_id))


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    description="Create a user. The username is stored lowercase and must be unique.",
    responses={
        201: {"description": "User created; its URL is in the Location header"},
        400: {"description": "Unknown favorite city"},
        409: {"description": "Username already exists"},
    },
)
async def create_user(payload: UserCreate, request: Request, response: Response, service: UserServiceDep) -> UserRead:
    """
    Create a new user.

    - **username**: Unique name, stored lowercase.
    - **minPopulation** ... **costOfLiving**: Optional preferences.
    - **favoriteCities**: Optional list of ``{"cityId": ...}`` references.
    """
    created = await service.create(payload.to_domain())
    response.headers["Location"] = str(request.url_for("get_user", user_id=created.id))
    return UserRead.from_domain(created)


@router.put(
    "/{user_id}",
    response_model=UserRead,
    summary="Replace User",
    description="Replace the full state of a user. Omitted preferences become null and omitted favorites are removed.",
    responses={
        404: {"description": "User not found"},
        409: {"description": "Username already exists"},
    },
)
async def replace_user(user_id: int, payload: UserReplace, service: UserServiceDep) -> UserRead:
    updated = await service.replace(user_id, payload.to_domain(user_id))
    return UserRead.from_domain(updated)


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Update User",
    description=(
        "Apply a sparse JSON document to a user. Keys that are absent or null keep the stored value; "
        "unknown keys are ignored. Favorites are not affected."
    ),
    responses={
        400: {"description": "Malformed document or invalid value"},
        404: {"description": "User not found"},
        409: {"description": "Username already exists"},
    },
    openapi_extra=merge_patch_body(UserFields),
)
async def update_user(user_id: int, request: Request, service: UserServiceDep) -> UserRead:
    updated = await service.update(user_id, await request.body())
    return UserRead.from_domain(updated)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete User",
    description="Delete a user and its favorite-city associations. The cities are kept.",
    responses={404: {"description": "User not found"}},
)
async def delete_user(user_id: int, service: UserServiceDep) -> None:
    await service.delete(user_id)


@router.get(
    "/{user_id}/favorites",
    response_model=List[FavoriteCityRead],
    summary="List Favorite Cities",
    description="List the favorite cities of a user in their stored order.",
    responses={404: {"description": "User not found"}},
)
async def list_favorites(user_id: int, service: UserServiceDep) -> List[FavoriteCityRead]:
    favorites = await service.list_favorites(user_id)
    return [FavoriteCityRead.from_domain(favorite) for favorite in favorites]


@router.put(
    "/{user_id}/favorites/{city_id}",
    response_model=List[FavoriteCityRead],
    summary="Add Favorite City",
    description="Add a city to a user's favorites. Adding an existing favorite changes nothing.",
    responses={404: {"description": "User or city not found"}},
)
async def add_favorite(user_id: int, city_id: int, service: UserServiceDep) -> List[FavoriteCityRead]:
    user = await service.add_favorite(user_id, city_id)
    return [FavoriteCityRead.from_domain(favorite) for favorite in user.favorite_cities]


@router.delete(
    "/{user_id}/favorites/{city_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove Favorite City",
    description="Remove a city from a user's favorites.",
    responses={404: {"description": "User not found or city not among its favorites"}},
)
async def remove_favorite(user_id: int, city_id: int, service: UserServiceDep) -> None:
    await service.remove_favorite(user_id, city_id)
