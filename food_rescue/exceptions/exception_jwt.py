"""Exception handlers for the bearer token on a request."""
# pylint: disable=too-few-public-methods


class JWTError( Exception ):
    """Base class for some custom exceptions for the JWT handling."""


class JWTRequestError( JWTError ):
    """Exception for a request without a valid bearer token."""

    def __init__( self, reason='The request is missing a valid bearer token.' ):
        super().__init__()
        self.message = reason
