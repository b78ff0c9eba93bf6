"""Command line interface for feastvalue."""
