"""DevPortal Backend Application.

A content-aggregation portal that unifies GitHub repositories, Notion pages,
Craft documents and an AI agent catalog behind one authenticated dashboard.

Modules:
    - auth: JWT authentication and authorization
    - middleware: Error handling and standardized error responses
    - models: SQLAlchemy models (users, favorites, preferences, API keys, agents)
    - schemas: Pydantic models for request/response validation
    - sources: External source adapters (GitHub, Notion, Craft)
    - services: Normalization, aggregation, favorites store, agent catalog
    - config: Application configuration management
    - main: FastAPI application entry point
"""

__version__ = "1.0.0"
__author__ = "DevPortal Team"
