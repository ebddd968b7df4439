"""API Layer — FastAPI routes and error handlers over the two stores.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to the stores; no business rule lives in a route
"""
