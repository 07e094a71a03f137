"""Exception handlers for the donation lifecycle: claim, transport assignment and delivery."""
# pylint: disable=too-few-public-methods


class LifecycleError( Exception ):
    """Base class for the custom exceptions raised by the lifecycle engine."""

    def __init__( self, action=None, searchable_id=None ):
        super().__init__()
        self.action = action
        self.searchable_id = searchable_id


class UnauthorizedError( LifecycleError ):
    """Exception for a role or user that is not permitted to perform the action."""

    def __init__( self, action=None, searchable_id=None, message=None ):
        super().__init__( action, searchable_id )
        self.message = message or 'You are not permitted to {} this donation.'.format( action or 'modify' )


class InvalidTransitionError( LifecycleError ):
    """Exception for a donation that is not in the state the action requires."""

    def __init__( self, action=None, searchable_id=None, status=None ):
        super().__init__( action, searchable_id )
        self.status = status
        if status == 'expired':
            self.message = 'This donation has expired.'
        elif status:
            self.message = 'This donation was already {}.'.format( status )
        else:
            self.message = 'This donation can not be {}.'.format( action or 'changed' )


class AlreadyAssignedError( LifecycleError ):
    """Exception for a transport slot that is already taken by a volunteer."""

    def __init__( self, action=None, searchable_id=None ):
        super().__init__( action, searchable_id )
        self.message = 'A volunteer is already transporting this donation.'


class NotTransportEligibleError( LifecycleError ):
    """Exception for a transport request on a donation that does not need, or is not ready for, transport."""

    def __init__( self, action=None, searchable_id=None ):
        super().__init__( action, searchable_id )
        self.message = 'This donation is not awaiting transport.'


class LifecycleUnknownActionError( LifecycleError ):
    """Exception for an action kind the lifecycle engine does not know."""

    def __init__( self, action=None, searchable_id=None ):
        super().__init__( action, searchable_id )
        self.message = 'The action {} is not a donation action.'.format( action )
