"""Infrastructure layer: storage and import/export."""
