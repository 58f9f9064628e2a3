"""
VentureScope - Backend Application

This package implements a FastAPI-based backend service that evaluates early-stage
startups with the You.com Agents API, plus the helpers the Streamlit frontend
uses to render and persist the results.

Core Components:
- main: FastAPI application setup, middleware and error handlers
- routes: REST API endpoint for startup evaluation
- services: Agent client, stream parsing, evaluation fan-out, report extraction
  and session persistence
- client: HTTP client the frontend uses to call the backend
- utils: Configuration, logging and file storage
"""

# Version
__version__ = "1.0.0"

# Package exports
__all__ = [
    "main",           # FastAPI application
    "routes",         # API endpoints
    "services",       # Core services
    "client",         # Frontend API client
    "schemas",        # Pydantic schemas
    "utils",          # Utilities
]
