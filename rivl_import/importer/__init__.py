"""Declaration parsing and the import entry point."""
