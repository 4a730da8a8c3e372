class InvalidInputError(ValueError):
    """Raised when a required request parameter is missing or empty"""
    pass
