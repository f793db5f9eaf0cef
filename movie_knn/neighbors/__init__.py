"""Brute-force nearest-neighbor search over rating vectors."""
