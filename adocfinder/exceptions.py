class AdocFinderError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(AdocFinderError):
    # errors related to configuration.
    pass

class DiscoveryError(AdocFinderError):
    # errors while preparing source document discovery.
    pass

class OutputError(AdocFinderError):
    # errors during output operations.
    pass
