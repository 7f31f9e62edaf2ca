"""Configuration, auth, logging and other cross-cutting pieces."""
