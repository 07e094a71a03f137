"""Exception handlers for the AI summarization service."""
# pylint: disable=too-few-public-methods


class AIServiceError( Exception ):
    """Base class for the custom exceptions raised by the AI summarization service."""


class AIServiceUnavailableError( AIServiceError ):
    """Exception for a summarization call that failed or returned nothing useful."""

    def __init__( self, reason=None ):
        super().__init__()
        self.reason = reason
        self.message = 'The AI service is unavailable: {}.'.format( reason )
