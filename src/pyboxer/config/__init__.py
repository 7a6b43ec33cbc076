"""Configuration, credentials and the context for the API clients."""
