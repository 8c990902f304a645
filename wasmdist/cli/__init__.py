"""Command line interface for wasmdist."""
