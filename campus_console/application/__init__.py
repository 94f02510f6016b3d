"""
Application layer.

Use cases and application services of the admin console, written against
the outbound ports in ``ports.outbound``. Infrastructure adapters implement
those ports.
"""
