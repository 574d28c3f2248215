"""Qt application layer: the editor widget, its controllers and the main window."""
