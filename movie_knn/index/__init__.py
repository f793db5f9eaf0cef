"""Dense per-movie rating vectors built from sparse rating observations."""
