"""Option resolution, fact extraction, report building and rendering."""
