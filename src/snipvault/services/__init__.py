"""Service layer: vault operations and import/export."""
