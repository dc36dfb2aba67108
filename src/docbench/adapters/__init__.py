"""Infrastructure adapters for document extraction and artifact storage."""
