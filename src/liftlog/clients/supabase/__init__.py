"""Supabase backend client."""

from .client import SupabaseGateway

__all__ = ["SupabaseGateway"]
