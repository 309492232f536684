"""Comment convention rules."""
