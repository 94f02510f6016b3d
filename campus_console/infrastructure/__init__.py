"""Infrastructure layer: adapters for the backend, SMS provider and realtime feed."""
