"""Shared service clients."""
