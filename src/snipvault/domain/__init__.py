"""Domain layer: entities, default catalog, ordering, reconciliation, gestures."""
