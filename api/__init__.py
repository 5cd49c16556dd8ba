"""HTTP layer: routes, authentication and middleware."""
