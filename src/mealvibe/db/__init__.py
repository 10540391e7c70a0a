"""Document store access (Supabase)."""
