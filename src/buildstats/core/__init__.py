"""Build result model and loaders."""
