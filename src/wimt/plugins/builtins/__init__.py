"""Built-in plugins shipped with wimt."""
