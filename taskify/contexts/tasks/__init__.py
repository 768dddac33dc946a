"""Tasks context: used in-process by the gateway."""
