"""
API endpoints for cities and their historical weather.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, Request, Response, status

from cityprefs.core.models.io import CityCreate, CityRead, HistoricalWeatherCreate, HistoricalWeatherRead
from cityprefs.core.models.io.cities import CityFields
from cityprefs.server.services.deps import CityServiceDep

from .patch_body import merge_patch_body

router = APIRouter(tags=["cities"])


@router.get(
    "",
    response_model=List[CityRead],
    summary="List Cities",
    description="List all cities ordered by ID, with optional pagination.",
)
async def list_cities(
    service: CityServiceDep,
    limit: Optional[int] = Query(default=None, ge=1),
    offset: Optional[int] = Query(default=None, ge=0),
) -> List[CityRead]:
    cities = await service.find_all(limit=limit, offset=offset)
    return [CityRead.from_domain(city) for city in cities]


@router.get(
    "/name/like/{fragment}",
    response_model=List[CityRead],
    summary="Search Cities by Name",
    description="List cities whose name contains the fragment, ignoring case.",
)
async def search_cities(fragment: str, service: CityServiceDep) -> List[CityRead]:
    return [CityRead.from_domain(city) for city in await service.find_by_name_containing(fragment)]


@router.get(
    "/name/{name}",
    response_model=CityRead,
    summary="Get City by Name",
    responses={404: {"description": "City not found"}},
)
async def get_city_by_name(name: str, service: CityServiceDep) -> CityRead:
    return CityRead.from_domain(await service.find_by_name(name))


@router.get(
    "/{city_id}",
    response_model=CityRead,
    summary="Get City",
    responses={404: {"description": "City not found"}},
)
async def get_city(city_id: int, service: CityServiceDep) -> CityRead:
    return CityRead.from_domain(await service.find_by_id(city_id))


@router.post(
    "",
    response_model=CityRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create City",
    responses={409: {"description": "City name already exists"}},
)
async def create_city(payload: CityCreate, request: Request, response: Response, service: CityServiceDep) -> CityRead:
    created = await service.create(payload.to_domain())
    response.headers["Location"] = str(request.url_for("get_city", city_id=created.id))
    return CityRead.from_domain(created)


@router.patch(
    "/{city_id}",
    response_model=CityRead,
    summary="Update City",
    description="Apply a sparse JSON document to a city. Keys that are absent or null keep the stored value.",
    responses={
        400: {"description": "Malformed document or invalid value"},
        404: {"description": "City not found"},
        409: {"description": "City name already exists"},
    },
    openapi_extra=merge_patch_body(CityFields),
)
async def update_city(city_id: int, request: Request, service: CityServiceDep) -> CityRead:
    return CityRead.from_domain(await service.update(city_id, await request.body()))


@router.delete(
    "/{city_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete City",
    description="Delete a city, its historical weather and every favorite pointing at it.",
    responses={404: {"description": "City not found"}},
)
async def delete_city(city_id: int, service: CityServiceDep) -> None:
    await service.delete(city_id)


@router.get(
    "/{city_id}/weather",
    response_model=List[HistoricalWeatherRead],
    summary="List Historical Weather",
    responses={404: {"description": "City not found"}},
)
async def list_weather(city_id: int, service: CityServiceDep) -> List[HistoricalWeatherRead]:
    return [HistoricalWeatherRead.from_domain(weather) for weather in await service.list_weather(city_id)]


@router.post(
    "/{city_id}/weather",
    response_model=HistoricalWeatherRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Historical Weather",
    responses={404: {"description": "City not found"}},
)
async def add_weather(city_id: int, payload: HistoricalWeatherCreate, service: CityServiceDep) -> HistoricalWeatherRead:
    return HistoricalWeatherRead.from_domain(await service.add_weather(payload.to_domain(city_id)))
