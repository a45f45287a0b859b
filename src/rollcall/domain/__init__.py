"""Pure domain layer: guest records, reconciliation, attendance, lottery and sync policy."""
