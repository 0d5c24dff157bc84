"""Version ordering and release resolution."""
