"""List a directory's entries with their total sizes, sorted by size."""
