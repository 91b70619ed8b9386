"""Exception hierarchy for the risk-assessment kernel."""


class CosmoRiskError(Exception):
    """Base class for all kernel errors."""


class InvalidInputError(CosmoRiskError, ValueError):
    """Raised when an input lies outside a function's documented domain."""


class ConfigError(CosmoRiskError, ValueError):
    """Raised when a configuration file or mapping cannot be applied."""
