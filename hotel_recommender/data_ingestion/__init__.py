"""
Catalog ingestion package.

Responsibilities:
- Read raw point-of-interest and hotel exports (JSON).
- Normalize them into the canonical catalog columns.
- Persist the processed catalog as CSV for the recommendation service.
"""
