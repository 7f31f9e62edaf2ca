"""Chameleon Docs: documentation hosting with AI-assisted rewrites."""
