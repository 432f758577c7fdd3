"""Release drivers built on the versioning core."""
