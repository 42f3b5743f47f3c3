"""Core recognition, analysis and export pipeline."""
