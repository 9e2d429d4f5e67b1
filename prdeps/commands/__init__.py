"""CLI commands for prdeps."""
