"""
SnapSolve Server Package.

This package contains the web server for SnapSolve: the FastAPI application,
API route definitions, request/response schemas and dependency wiring.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Error to HTTP response mapping.
    services: Request-scoped dependencies.
"""
