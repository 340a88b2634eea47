"""Collaborators that sit around the archive engine: grouping, collection and rendering."""
