"""Preview Relay - link-preview friendly redirects for Substack posts."""

__version__ = "0.1.0"
