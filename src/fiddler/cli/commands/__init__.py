"""Top-level Fiddler commands (auto-discovered by the dispatcher)."""
