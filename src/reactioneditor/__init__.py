"""Form editor for Reaction records: load/unload, validation and autosave."""
