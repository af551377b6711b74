class AnalyzerError(Exception):
    """Base error; carries the HTTP status and the message shown to callers."""

    status_code = 500
    message = "Internal server error."

    def __init__(self, message: str | None = None, detail: str | None = None):
        self.message = message or self.message
        # detail is for the logs only, never rendered
        self.detail = detail
        super().__init__(detail or self.message)


class ConfigurationError(AnalyzerError):
    pass


class ValidationError(AnalyzerError):
    status_code = 400
    message = "Invalid request."


class FetchError(AnalyzerError):
    message = "Failed to analyze website due to an internal server error."


class FetchTimeoutError(FetchError):
    status_code = 504
    message = "Website analysis timed out. The server did not respond in time."


class NotFoundError(AnalyzerError):
    status_code = 404
    message = "Record not found."


class InternalError(AnalyzerError):
    pass
