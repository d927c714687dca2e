"""Value types, chunk buffer and line scanner."""
