"""Domain layer: repository contracts and read models."""
