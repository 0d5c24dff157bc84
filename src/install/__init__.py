"""Materialize package versions into versioned prefixes and describe them."""
