"""Helper modules shared by the scanner, the orchestrator and the CLI."""
