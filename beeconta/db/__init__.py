"""
Database access layer for BeeConta backend.

All data lives in a hosted Supabase project. This package only builds
clients; table access happens in beeconta.services.

All database operations MUST:
- Respect Row Level Security (RLS) by using the user's JWT
- Never use the service-role client for user-initiated requests
- Never invent table names: the Portuguese table and column names are the
  contract with the existing store

DO NOT define table schemas, migrations, or RLS policies here.
"""

from .client import (
    SupabaseClients,
    create_auth_client,
    get_supabase_client,
    get_supabase_clients,
)

__all__ = [
    "SupabaseClients",
    "create_auth_client",
    "get_supabase_client",
    "get_supabase_clients",
]
