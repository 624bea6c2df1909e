"""Custom exceptions for the Agency Contracts service."""


class AgencyContractsError(Exception):
    """Base exception for the contracts service."""
    
    pass


class ValidationError(AgencyContractsError):
    """Raised when validation fails."""
    
    pass


class NotFoundError(AgencyContractsError):
    """Raised when a resource is not found."""
    
    pass


class ConfigurationError(AgencyContractsError):
    """Raised when configuration is invalid."""
    
    pass
