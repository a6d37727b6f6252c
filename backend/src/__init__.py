"""
Troop User Service Backend

User accounts and follower/following relationships.

Package Structure:
==================
    src/
    ├── api/        ← FastAPI application
    ├── shared/     ← Shared code (models, services, etc.)
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn src.api.main:app --reload
"""
