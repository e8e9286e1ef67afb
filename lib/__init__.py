# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper implementing the media store
# - utils.py: Shared utilities (base error class, slugs)
#
# supabase_client is imported from its module directly
# (from lib.supabase_client import SupabaseClient) because it reads settings
# at import time.
# =============================================================================

from lib.utils import ApplicationError, slugify

__all__ = [
    "ApplicationError",
    "slugify",
]
