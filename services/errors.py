class TideDataError(Exception):
    """Base exception for crossing-times extraction errors."""
    pass

class FormatError(TideDataError, ValueError):
    """Raised when a filename, time or label does not have the expected shape."""
    pass

class InvalidDateError(TideDataError, ValueError):
    """Raised when a row's day number is not a real date in its month."""
    pass

class LookupFailure(TideDataError):
    """Raised when the sunrise/sunset service gives no usable answer."""
    pass

class SourceReadFailure(TideDataError, OSError):
    """Raised when a source HTML file cannot be read."""
    pass
