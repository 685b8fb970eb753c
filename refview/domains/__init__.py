"""Entity kinds that can be filtered."""
