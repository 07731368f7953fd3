"""
Partnerboard Backend Package.

FastAPI service layer of the partner performance dashboard: fetches partner
metrics from the automation webhook, normalizes them into canonical records and
serves the best/worst/dormant views with search, filters and sorting. Also hosts
the password policy and email MFA code endpoints.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration, database, and dependencies
    - models: Pydantic schemas and enums
    - services: Business logic services
"""

__version__ = "1.0.0"
