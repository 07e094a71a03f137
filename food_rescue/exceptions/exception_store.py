"""Exception handlers for the donation record store."""
# pylint: disable=too-few-public-methods


class StoreError( Exception ):
    """Base class for the custom exceptions raised by the record store."""


class StoreUnavailableError( StoreError ):
    """Exception for a persistence call that failed: the session has been rolled back."""

    def __init__( self, where=None ):
        super().__init__()
        self.where = where
        self.message = 'The donation store is unavailable at {}. Please try again.'.format( where )
