"""Command implementations for the rustydeps CLI."""
