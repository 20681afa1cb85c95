"""
StarterKit Backend — Application Package Initializer
=====================================================

What: Marks the `starterkit` directory as a Python package.
Who:  Used by uvicorn (`--factory starterkit.main:create_app`), the CLI (`python -m starterkit`) and pytest.

Architecture Note:
    The backend is a thin request/response shim laid out in layers:

    ┌─────────────────────────────────────┐
    │        Middleware (ordered)         │  ← headers, CORS, gzip, access log, body limit
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Domain Logic)     │  ← user fabrication, API client
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic request/response models
    └─────────────────────────────────────┘

    Nothing is persisted; every entity lives for a single request.
"""

__version__ = "1.0.0"
