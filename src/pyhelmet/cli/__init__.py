"""pyhelmet command-line interface."""
