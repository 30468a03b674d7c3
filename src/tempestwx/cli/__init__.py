"""Command-line interface for tempestwx."""
