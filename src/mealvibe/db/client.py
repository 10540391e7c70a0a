"""
MealVibe - Supabase Client.

Only the persisted auth backend touches the document store.
"""

from supabase import Client, create_client

from mealvibe.config import settings

# Singleton client instance
_client: Client | None = None


def get_service_client() -> Client:
    """
    Get a Supabase client with the service role key.

    Uses singleton pattern to reuse connection.
    """
    global _client

    if _client is None:
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are required for the supabase auth backend")
        _client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _client
