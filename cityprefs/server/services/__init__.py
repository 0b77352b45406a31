"""
Application services.

Services sit between the HTTP routers and the repositories: they resolve
identities, run the patch engine and the relation reconciler, and raise the
domain errors the routers render.
"""

from .cities import CityService
from .users import UserService

__all__ = ["CityService", "UserService"]
