"""Base exception for hubform.

Concrete errors live next to the code that raises them
(FetchError in the fetcher, ConfigError in config, shell errors in the shell).
"""


class HubFormError(Exception):
    """Base class for all hubform errors."""

    pass
