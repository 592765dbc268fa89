"""
Engagement Analytics Backend Package.

FastAPI service layer for the WhatsApp customer-engagement dashboard.
Provides the predictive analytics engine (forecasts, alerts, temporal
patterns, recommendations, sentiment) and its HTTP API.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, and dependencies
    - models: Pydantic schemas and enums
    - services: Statistical pipeline and supporting services
    - sql: Parameterized SQL queries
"""

__version__ = "1.0.0"
