"""The lifecycle engine: the donation state machine and the mutation each legal action makes.

    available --claim--> claimed --deliver--> delivered
        |
        +--( expiration date passes )--> expired

A transport volunteer may be assigned while the donation is claimed; that does not change the status. An available
donation whose expiration date has passed is treated as expired even when the expiry was never written, and every
action against it fails. Delivered and expired are terminal.

Each action checks its rules against the donation as read, and then writes through the store's compare-and-set. If
the write finds the donation changed underneath it, the rules are checked again against the current record so the
caller gets the reason the action is no longer legal.
"""
import logging

from food_rescue.exceptions.exception_lifecycle import AlreadyAssignedError
from food_rescue.exceptions.exception_lifecycle import InvalidTransitionError
from food_rescue.exceptions.exception_lifecycle import LifecycleUnknownActionError
from food_rescue.exceptions.exception_lifecycle import NotTransportEligibleError
from food_rescue.exceptions.exception_lifecycle import UnauthorizedError
from food_rescue.helpers.clock import utcnow
from food_rescue.helpers.model_serialization import from_json
from food_rescue.models.donation import AVAILABLE
from food_rescue.models.donation import CLAIMED
from food_rescue.models.donation import DELIVERED
from food_rescue.models.donation import EXPIRED
from food_rescue.models.user_profile import Role
from food_rescue.schemas.donation import DonationSchema

CREATE = 'create'
CLAIM = 'claim'
ASSIGN_TRANSPORT = 'assign-transport'
DELIVER = 'deliver'
ACTIONS = ( CLAIM, ASSIGN_TRANSPORT, DELIVER )


class LifecycleEngine:
    """Applies lifecycle actions to donations on behalf of an acting user.

    :param store: The record store, e.g. DonationStore, providing get(), create() and conditional_update().
    :param clock: A callable returning the current UTC datetime.
    """

    def __init__( self, store, clock=utcnow ):
        self.store = store
        self.clock = clock

    def today( self ):
        """The current UTC date, used for derived expiry."""
        return self.clock().date()

    def create( self, fields, acting_user ):
        """A business lists a new donation: it starts available.

        :param dict fields: The donation fields from the request, validated by DonationSchema.
        :param acting_user: The UserProfileModel of the business.
        :return: The new DonationModel.
        """

        if acting_user.role_type is not Role.BUSINESS:
            raise UnauthorizedError( CREATE )

        donation = from_json( DonationSchema(), fields )
        donation.donor_id = acting_user.id
        donation.donor_name = acting_user.display_name
        donation.status = AVAILABLE
        donation.created_at = self.clock()
        searchable_id = self.store.create( donation )

        logging.info( 'Donation %s listed by %s.', searchable_id, acting_user.id )
        return self.store.get( searchable_id )

    def apply_transition( self, searchable_id, action, acting_user ):
        """Look up the donation and apply the action to it.

        :param searchable_id: The donation searchable ID.
        :param str action: One of ACTIONS.
        :param acting_user: The UserProfileModel performing the action.
        :return: The updated DonationModel.
        """

        transitions = {
            CLAIM: self.claim,
            ASSIGN_TRANSPORT: self.assign_transport,
            DELIVER: self.deliver
        }
        if action not in transitions:
            raise LifecycleUnknownActionError( action, searchable_id )

        donation = self.store.get( searchable_id )
        return transitions[ action ]( donation, acting_user )

    def claim( self, donation, acting_user ):
        """A charity commits to receive an available donation."""

        self.check_claim( donation, acting_user )
        new_fields = {
            'status': CLAIMED,
            'claimed_by': acting_user.id,
            'claimed_by_name': acting_user.display_name,
            'claimed_at': self.clock()
        }
        expected_fields = { 'status': AVAILABLE, 'claimed_by': None }
        return self._write( CLAIM, self.check_claim, donation, acting_user, expected_fields, new_fields )

    def assign_transport( self, donation, acting_user ):
        """A volunteer commits to move a claimed donation that needs transport. The status does not change."""

        self.check_assign_transport( donation, acting_user )
        new_fields = {
            'transport_volunteer_id': acting_user.id,
            'transport_volunteer_name': acting_user.display_name,
            'transport_assigned_at': self.clock()
        }
        expected_fields = { 'status': CLAIMED, 'transport_needed': True, 'transport_volunteer_id': None }
        return self._write(
            ASSIGN_TRANSPORT, self.check_assign_transport, donation, acting_user, expected_fields, new_fields
        )

    def deliver( self, donation, acting_user ):
        """The assigned volunteer, or the claiming charity when no transport was needed, completes the delivery."""

        self.check_deliver( donation, acting_user )
        new_fields = {
            'status': DELIVERED,
            'delivered_by': acting_user.id,
            'delivered_at': self.clock()
        }
        expected_fields = { 'status': CLAIMED, 'transport_volunteer_id': donation.transport_volunteer_id }
        return self._write( DELIVER, self.check_deliver, donation, acting_user, expected_fields, new_fields )

    def expire( self, donation ):
        """Persist the expiry of an available donation past its expiration date.

        :return: True if the expiry was written, False if the donation was not expired or changed meanwhile.
        """

        if donation.status != AVAILABLE or not donation.is_past_expiration( self.today() ):
            return False

        written = self.store.conditional_update(
            donation.id, { 'status': AVAILABLE }, { 'status': EXPIRED, 'expired_at': self.clock() }
        )
        if written:
            logging.info( 'Donation %s expired.', donation.searchable_id )
        return written

    def check_claim( self, donation, acting_user ):
        """Raise if the acting user may not claim the donation."""

        if acting_user.role_type is not Role.CHARITY:
            raise UnauthorizedError( CLAIM, donation.searchable_id )

        status = donation.effective_status( self.today() )
        if status != AVAILABLE:
            raise InvalidTransitionError( CLAIM, donation.searchable_id, status )

    def check_assign_transport( self, donation, acting_user ):
        """Raise if the acting user may not volunteer to transport the donation."""

        if acting_user.role_type is not Role.VOLUNTEER:
            raise UnauthorizedError( ASSIGN_TRANSPORT, donation.searchable_id )

        status = donation.effective_status( self.today() )
        if status == EXPIRED:
            raise InvalidTransitionError( ASSIGN_TRANSPORT, donation.searchable_id, status )
        if not donation.transport_needed or status != CLAIMED:
            raise NotTransportEligibleError( ASSIGN_TRANSPORT, donation.searchable_id )
        if donation.transport_volunteer_id:
            raise AlreadyAssignedError( ASSIGN_TRANSPORT, donation.searchable_id )

    def check_deliver( self, donation, acting_user ):
        """Raise if the acting user may not mark the donation delivered."""

        status = donation.effective_status( self.today() )
        if status != CLAIMED:
            raise InvalidTransitionError( DELIVER, donation.searchable_id, status )

        if donation.transport_volunteer_id:
            permitted = acting_user.id == donation.transport_volunteer_id
        else:
            permitted = not donation.transport_needed and acting_user.id == donation.claimed_by
        if not permitted:
            raise UnauthorizedError( DELIVER, donation.searchable_id )

    def _write( self, action, check, donation, acting_user, expected_fields, new_fields ):
        """Compare-and-set the new fields, and on a lost race report why the action is no longer legal."""

        searchable_id = donation.searchable_id
        if not self.store.conditional_update( donation.id, expected_fields, new_fields ):
            current = self.store.get( searchable_id )
            logging.warning( 'Donation %s changed before %s by %s could be written.', searchable_id, action,
                             acting_user.id )
            check( current, acting_user )
            raise InvalidTransitionError( action, searchable_id )

        logging.info( 'Donation %s: %s by %s.', searchable_id, action, acting_user.id )
        return self.store.get( searchable_id )
