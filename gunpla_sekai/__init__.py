"""Gunpla Sekai.

Backend for a community of Gunpla (Gundam plastic model kit) builders.

High-level architecture
-----------------------

The codebase is organized around two packages:

- ``gunpla_sekai.core``:

  - SQLModel entities and async repositories for the catalog (timelines,
    series, grades, product lines, release types, mobile suits, kits) and for
    user content (collections, builds, milestones, reviews, uploads, cards).
  - Domain rules that do not depend on HTTP, e.g. review score validation and
    search result ranking.
  - Logging and Logfire monitoring setup.

- ``gunpla_sekai.server``:

  - The FastAPI application, its ``/api/v1`` routers and middleware.
  - Services wrapping the managed providers: Clerk (auth and user webhooks),
    Cloudinary (signed uploads) and Meilisearch (kit search).

Typical workflow
----------------

1. A Clerk webhook creates the local ``User`` row.
2. The user browses the catalog and adds kits to their collection.
3. They start a ``Build`` for a kit, upload images to its gallery and arrange
   them into milestones.
4. They review the kit across six categories; other users vote the review
   helpful or not.
"""
