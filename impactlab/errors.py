class InvalidArgument(ValueError):
    """Raised when an impact input, coordinate or query radius is out of range."""
