class LuckyDrawError(Exception):
    """Base error for the lucky draw tool."""


class InvalidConfigurationError(LuckyDrawError, ValueError):
    """Raised when a setting such as the group size is not usable."""
