"""Core types shared by every layer: results, errors, configuration."""
