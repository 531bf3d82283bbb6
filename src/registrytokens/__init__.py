"""Personal access token lookups for the extension registry."""
