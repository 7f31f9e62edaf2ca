"""Python clients for the Chameleon Docs HTTP API."""
