"""Role scoped visibility of donations.

    business:  its own donations, any status.
    charity:   available ( and not past expiration ) or claimed donations, platform wide.
    volunteer: claimed donations that need transport, either unassigned or assigned to the volunteer.
    no role:   the most recent donations, any status.

The rules exist twice: as SQLAlchemy criteria so the store returns only what may be shown, and as a pure filter over
records that is applied to the store results. Results are most recent first and bounded per role.
"""
from sqlalchemy import and_
from sqlalchemy import or_

from food_rescue.models.donation import AVAILABLE
from food_rescue.models.donation import CLAIMED
from food_rescue.models.donation import DonationModel
from food_rescue.models.user_profile import Role

RESULT_LIMITS = {
    Role.BUSINESS: 10,
    Role.CHARITY: 20,
    Role.VOLUNTEER: 20,
    None: 10
}


def role_of( acting_user ):
    """The Role of the acting user, or None for a user without a profile."""

    if acting_user is None:
        return None
    return acting_user.role_type


def is_visible( donation, acting_user, today ):
    """Whether the acting user may see the donation.

    :param donation: DonationModel
    :param acting_user: UserProfileModel, or None.
    :param date today: The date used for derived expiry.
    :return: bool
    """

    role = role_of( acting_user )
    if role is None:
        return True
    if role is Role.BUSINESS:
        return donation.donor_id == acting_user.id
    if role is Role.CHARITY:
        return donation.effective_status( today ) in ( AVAILABLE, CLAIMED )
    if role is Role.VOLUNTEER:
        return donation.status == CLAIMED and bool( donation.transport_needed ) and \
            donation.transport_volunteer_id in ( None, acting_user.id )
    raise ValueError( 'No visibility rule for role {}.'.format( role ) )


def filter_visible( donations, acting_user, today, bounded=True ):
    """Return the donations the acting user may see, most recent first, bounded by the role's limit.

    This is a pure function of its arguments.

    :param donations: An iterable of DonationModel.
    :param acting_user: UserProfileModel, or None.
    :param date today: The date used for derived expiry.
    :param bool bounded: Apply the role's result limit.
    :return: A list of DonationModel.
    """

    visible = [ donation for donation in donations if is_visible( donation, acting_user, today ) ]
    visible.sort( key=lambda donation: ( donation.created_at, donation.id or 0 ), reverse=True )
    if bounded:
        return visible[ :RESULT_LIMITS[ role_of( acting_user ) ] ]
    return visible


def visibility_criteria( acting_user, today ):
    """The SQLAlchemy filters equivalent to is_visible().

    :param acting_user: UserProfileModel, or None.
    :param date today: The date used for derived expiry.
    :return: A list of SQLAlchemy boolean expressions.
    """

    role = role_of( acting_user )
    if role is None:
        return []
    if role is Role.BUSINESS:
        return [ DonationModel.donor_id == acting_user.id ]
    if role is Role.CHARITY:
        return [
            or_(
                DonationModel.status == CLAIMED,
                and_( DonationModel.status == AVAILABLE, DonationModel.expiration_date >= today )
            )
        ]
    if role is Role.VOLUNTEER:
        return [
            DonationModel.status == CLAIMED,
            DonationModel.transport_needed.is_( True ),
            or_(
                DonationModel.transport_volunteer_id.is_( None ),
                DonationModel.transport_volunteer_id == acting_user.id
            )
        ]
    raise ValueError( 'No visibility rule for role {}.'.format( role ) )


def list_visible( store, acting_user, today, bounded=True ):
    """Query the store for the donations the acting user may see.

    :param store: The record store.
    :param acting_user: UserProfileModel, or None.
    :param date today: The date used for derived expiry.
    :param bool bounded: Apply the role's result limit, as the dashboards do; statistics use every donation.
    :return: A list of DonationModel, most recent first.
    """

    donations = store.query(
        filters=visibility_criteria( acting_user, today ),
        order=[ DonationModel.created_at.desc(), DonationModel.id.desc() ],
        limit=RESULT_LIMITS[ role_of( acting_user ) ] if bounded else None
    )
    return filter_visible( donations, acting_user, today, bounded )
