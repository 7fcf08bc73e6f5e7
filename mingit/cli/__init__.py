"""Command-line interface for MinGit."""
