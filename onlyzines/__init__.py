"""OnlyZines publishing backend."""
