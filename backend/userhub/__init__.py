"""
UserHub Backend - Application Package
======================================

What: CRUD HTTP service for a single "user" resource.
Who:  Imported by uvicorn (`userhub.main:app`), Alembic, pytest and the
      `python -m userhub` entry point.

Layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Persistence calls)   │  ← list/get/create/update/delete
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
