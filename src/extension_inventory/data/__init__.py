"""Built-in default configuration."""
