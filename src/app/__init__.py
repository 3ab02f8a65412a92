"""PySide6 viewer for decoded SNSS files."""
