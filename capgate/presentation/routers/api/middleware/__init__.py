"""Request middleware and shared route dependencies."""
