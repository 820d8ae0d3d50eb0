from fastapi import status


class StringAnalyzerError(Exception):
    """Base class for every error the service maps to an HTTP response"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


class InvalidTypeError(StringAnalyzerError, TypeError):
    status_code = 422
    message = 'Invalid data type for "value" (must be string)'


class InvalidRequestError(StringAnalyzerError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request body or missing \"value\" field"


class FilterValidationError(StringAnalyzerError, ValueError):
    """A filter value could not be converted to its expected type"""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid query parameter values or types"

    def __init__(self, filter_name: str, message: str = None):
        self.filter_name = filter_name
        super().__init__(message or f"{filter_name} has an invalid value")


class ConflictingFiltersError(StringAnalyzerError):
    status_code = 422
    message = "Query parsed but resulted in conflicting filters"


class StringNotFoundError(StringAnalyzerError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "String does not exist in the system"


class StringAlreadyExistsError(StringAnalyzerError):
    status_code = status.HTTP_409_CONFLICT
    message = "String already exists in the system"


class StoreNotInitializedError(StringAnalyzerError, RuntimeError):
    message = "Store not initialized. Call init(location) first."
