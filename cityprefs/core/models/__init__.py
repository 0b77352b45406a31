"""
Models for cityprefs.

- ``domain``: immutable domain models shared by the patch engine, the
  repositories and the services.
- ``io``: request/response schemas for the HTTP API.
"""
