"""
FastAPI routers for all API endpoints.

Each module defines a router for one domain (companies, bank accounts, etc.).
Routes authenticate the caller, call a service with a user-scoped Supabase
client and translate the service envelope with routes.errors.raise_for_result.
"""
