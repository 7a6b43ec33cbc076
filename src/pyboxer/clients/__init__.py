"""API clients for the Box API, one per API area."""
