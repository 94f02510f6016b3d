"""Outbound adapters (implementations of application ports)."""
