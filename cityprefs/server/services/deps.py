"""
Service Dependencies.

Provides per-request service instances bound to a database session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cityprefs.core.database import get_session

from .cities import CityService
from .users import UserService


def get_user_service(session: AsyncSession = Depends(get_session)) -> UserService:
    return UserService(session)


def get_city_service(session: AsyncSession = Depends(get_session)) -> CityService:
    return CityService(session)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CityServiceDep = Annotated[CityService, Depends(get_city_service)]
