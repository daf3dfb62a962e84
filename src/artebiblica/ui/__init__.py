"""Browser-facing helpers: form state, validation, print page and share links."""
