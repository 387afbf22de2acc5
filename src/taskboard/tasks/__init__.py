"""Task records and their serialized form."""
