"""
Shared Module

Code shared by every entry point of the user service:
- Models: SQLAlchemy ORM models
- Repositories: Data access layer
- Services: Business logic layer
- Schemas: Pydantic request/response models
- Core: Logging, exceptions
- Adapters: External service integrations (Keycloak)

Package Structure:
==================
    shared/
    ├── core/           ← Logging, exceptions
    ├── db/             ← Database session management
    ├── models/         ← SQLAlchemy models
    ├── repositories/   ← Data access layer
    ├── services/       ← Business logic
    ├── schemas/        ← Pydantic schemas
    └── adapters/       ← External services

Usage:
======
    from src.shared.models import User, Operation
    from src.shared.services import UserService, RelationshipService
    from src.shared.core import logger, TroopException
"""
