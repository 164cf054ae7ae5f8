"""clibricks - building blocks for project command line tools

Philosophy:
- Ruthless simplicity
- Brick architecture (self-contained modules)
- Explicit configuration, no hidden global state
- Fail fast with helpful messages

Bricks: a configuration-driven help menu, a docker compose command runner,
a GitHub release client, and user messages/confirmations.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
