"""Command line interface for pwgen-profiles."""
