"""Command line interface for the plugin registry publisher."""
