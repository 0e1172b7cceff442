"""Command line interface for flexible_presenter."""
