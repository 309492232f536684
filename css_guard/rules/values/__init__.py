"""Declaration value rules."""
