"""cityprefs.

A small CRUD backend for users, cities and the cities a user marks as
favorites. Users carry optional numeric preferences (population, rent, house
cost, cost of living) that are usually edited one field at a time.

High-level architecture
-----------------------

- ``cityprefs.core.patching``:

  - The sparse patch applier: a per-field resolver, a merge engine driven by
    static tables of patchable fields, and a reconciler for the owned
    favorite-city collection.

- ``cityprefs.core.models``:

  - Immutable domain models (``User``, ``City``, ...) and the I/O schemas used
    by the HTTP layer.

- ``cityprefs.core.database``:

  - SQLAlchemy rows, the async engine/session factory and the repositories
    that translate between rows and domain models.

- ``cityprefs.server``:

  - The FastAPI application, its services, routers and exception handlers.

Typical workflow
----------------

1. A ``PATCH`` request body reaches ``UserService.update`` as raw JSON.
2. The current ``User`` is loaded through ``UserRepository.get_by_id``.
3. ``merge`` resolves every patchable field and returns an updated copy.
4. ``UserRepository.update`` writes the copy back under the same identity.
"""
