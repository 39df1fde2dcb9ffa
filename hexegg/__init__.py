"""Core of a hex viewer and editor: patchable buffers, search and analysis, file signatures and configuration."""

__version__ = "0.1.0"