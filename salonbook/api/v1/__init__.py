"""Version 1 of the SalonBook HTTP API."""
