"""Movie catalog and identity lookups."""
