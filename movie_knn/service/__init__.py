"""HTTP surface for similar-movie lookups."""
