"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: internal records (app.models)
- Schemas: API contract (what client sends/receives)

Everything lives in app.schemas.schemas.
"""
