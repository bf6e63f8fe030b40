"""Domain models and errors, free of storage and presentation concerns."""
