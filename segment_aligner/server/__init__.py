"""HTTP API server for the segment aligner.

WHY: Browser clients reach the aligner over HTTP rather than importing
Python. This package holds the FastAPI app and its pydantic models.

HOW: app.py defines the FastAPI application and endpoints, models.py the
request/response schemas.
"""
