"""Infrastructure configuration: composition root."""
