"""Infrastructure layer: configuration, database and ORM models."""
