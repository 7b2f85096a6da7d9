class ConfigMissingError(Exception):
    """Raised when a required configuration value is absent."""
