"""
Gunpla Sekai Server Package.

This package contains the web server implementation for Gunpla Sekai.
It includes the API definition, request-scoped services, middleware and configuration.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Server configuration and constants.
    services: Business rules shared by the routers.
    middleware: Request tracing.
    exception_handlers: Mapping of domain errors onto HTTP responses.
"""
