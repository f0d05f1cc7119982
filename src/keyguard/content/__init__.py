"""Content sources — collaborators that supply already-fetched page text."""
