"""Pure domain logic: shaping, request identity, error classification, formatting."""
