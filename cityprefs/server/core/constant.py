"""
Server Constants.

Static values shared by the application factory and the routers.
"""

PROJECT_NAME = "cityprefs"
API_V1_STR = "/api/v1"
API_VERSION = "1.0.0"
SCHEMA_VERSION = "v1"
