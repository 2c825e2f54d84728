"""Command-line support for semtag."""
