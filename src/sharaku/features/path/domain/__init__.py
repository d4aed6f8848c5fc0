"""Path sanitizing and template rendering."""
