"""Exception handlers for the models."""
# pylint: disable=too-few-public-methods


class ModelError( Exception ):
    """Base class for some custom exceptions for the models."""


class ModelDonationNotFoundError( ModelError ):
    """Exception for a donation that does not exist or is not visible to the user."""

    def __init__( self ):
        super().__init__()
        self.message = 'The donation was not found.'


class ModelUserProfileNotFoundError( ModelError ):
    """Exception for a user without a profile."""

    def __init__( self ):
        super().__init__()
        self.message = 'There is no profile for this user.'


class ModelUserProfileExistsError( ModelError ):
    """Exception for creating a second profile for the same user, or reusing another profile's email."""

    def __init__( self, message='A profile already exists for this user.' ):
        super().__init__()
        self.message = message


class ModelUserProfileRoleImmutableError( ModelError ):
    """Exception for an attempt to change the role on a profile."""

    def __init__( self ):
        super().__init__()
        self.message = 'The role on a profile can not be changed.'
