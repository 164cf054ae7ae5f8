"""clibricks modules - self-contained bricks used by the CLI commands."""
