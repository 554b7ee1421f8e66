"""Adapters binding middleware chains to concrete servers."""
