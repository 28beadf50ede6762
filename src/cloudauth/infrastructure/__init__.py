"""Infrastructure: persistence, authentication and the HTTP API."""
