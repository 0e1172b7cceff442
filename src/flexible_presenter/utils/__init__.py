"""Shared utilities: errors, logging, merging."""
