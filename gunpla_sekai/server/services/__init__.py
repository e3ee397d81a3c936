"""Request-scoped services holding the business rules behind the API routers."""
