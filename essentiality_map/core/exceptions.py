class EssentialityMapError(Exception):
    """Base exception for all essentiality_map errors"""
    pass

class ConfigError(EssentialityMapError):
    """Invalid or inconsistent global.json"""
    pass

class ValidationError(EssentialityMapError):
    """
    User input rejected before any work is done
    (missing or blank gene identifier)
    """
    pass

class UpstreamError(EssentialityMapError):
    """
    The essentiality API could not give us usable data:
    transport failure, HTTP error, API error payload, missing/empty/malformed data
    """
    pass
