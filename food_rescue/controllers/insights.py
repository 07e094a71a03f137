"""Controllers for Flask-RESTful resources: gather the data for each kind of AI insight."""
from flask import current_app

from food_rescue.controllers.donation import get_lifecycle_engine
from food_rescue.exceptions.exception_lifecycle import UnauthorizedError
from food_rescue.exceptions.exception_model import ModelDonationNotFoundError
from food_rescue.helpers.donation_stats import impact_stats
from food_rescue.helpers.insights import DATE_FORMAT
from food_rescue.helpers.insights import INSIGHT_NOTICES
from food_rescue.helpers.insights import expiration_priorities_prompt
from food_rescue.helpers.insights import generate_insights
from food_rescue.helpers.insights import impact_prompt
from food_rescue.helpers.insights import matching_prompt
from food_rescue.helpers.insights import routes_prompt
from food_rescue.helpers.insights import waste_patterns_prompt
from food_rescue.helpers.visibility import list_visible
from food_rescue.models.donation import AVAILABLE
from food_rescue.models.donation import CLAIMED
from food_rescue.models.donation import DonationModel
from food_rescue.models.user_profile import Role
from food_rescue.models.user_profile import UserProfileModel

MATCHING_CHARITIES_LIMIT = 10


def get_insights( insight_type, acting_user, searchable_id=None ):
    """Build the prompt for the insight type and ask the AI service.

    :param str insight_type: One of INSIGHT_NOTICES.
    :param acting_user: UserProfileModel.
    :param str searchable_id: The donation to match, for the matching insight.
    :return: { 'insight_type': ..., 'insights': ..., 'notice': ... }
    """

    if insight_type not in INSIGHT_NOTICES:
        raise KeyError( 'The insight type {} does not exist.'.format( insight_type ) )

    builders = {
        'matching': lambda: build_matching_prompt( acting_user, searchable_id ),
        'waste-patterns': lambda: build_waste_patterns_prompt( acting_user ),
        'routes': lambda: build_routes_prompt( acting_user ),
        'expiration-priorities': lambda: build_expiration_priorities_prompt( acting_user ),
        'impact': build_impact_prompt
    }
    prompt_text = builders[ insight_type ]()
    if prompt_text is None:
        return {
            'insight_type': insight_type,
            'insights': None,
            'notice': 'There is not enough donation data for insights yet.'
        }
    return generate_insights( insight_type, prompt_text )


def require_role( acting_user, role, insight_type ):
    """Raise UnauthorizedError unless the acting user has the role."""

    if acting_user.role_type is not role:
        raise UnauthorizedError(
            insight_type, message='Your role can not request {} insights.'.format( insight_type )
        )


def build_matching_prompt( acting_user, searchable_id ):
    """Match one of the business's own donations against the charities on the platform."""

    require_role( acting_user, Role.BUSINESS, 'matching' )
    if not searchable_id:
        raise ModelDonationNotFoundError()

    engine = get_lifecycle_engine()
    donation = engine.store.get( searchable_id )
    if donation.donor_id != acting_user.id:
        raise ModelDonationNotFoundError()

    charities = UserProfileModel.query.filter_by( role=Role.CHARITY.value ) \
        .order_by( UserProfileModel.created_at.desc() ) \
        .limit( MATCHING_CHARITIES_LIMIT ) \
        .all()
    return matching_prompt( donation, charities )


def build_waste_patterns_prompt( acting_user ):
    """Analyze every donation of the business; needs a minimum history to say anything useful."""

    require_role( acting_user, Role.BUSINESS, 'waste-patterns' )
    engine = get_lifecycle_engine()
    donations = engine.store.query(
        filters=[ DonationModel.donor_id == acting_user.id ],
        order=[ DonationModel.created_at.desc() ]
    )
    if len( donations ) < current_app.config[ 'INSIGHTS_MINIMUM_DONATIONS' ]:
        return None
    return waste_patterns_prompt( donations )


def build_routes_prompt( acting_user ):
    """Route the volunteer through the pickups and drop offs of the transports assigned to them."""

    require_role( acting_user, Role.VOLUNTEER, 'routes' )
    engine = get_lifecycle_engine()
    transports = engine.store.query(
        filters=[ DonationModel.transport_volunteer_id == acting_user.id, DonationModel.status == CLAIMED ],
        order=[ DonationModel.transport_assigned_at ]
    )
    if not transports:
        return None

    profile_ids = { donation.donor_id for donation in transports } | \
        { donation.claimed_by for donation in transports }
    profiles = {
        profile.id: profile
        for profile in UserProfileModel.query.filter( UserProfileModel.id.in_( profile_ids ) ).all()
    }

    stops = []
    for donation in transports:
        stops.append( build_stop( 'Pickup of {}'.format( donation.food_name ), profiles.get( donation.donor_id ),
                                  donation.donor_name ) )
        stops.append( build_stop( 'Delivery of {}'.format( donation.food_name ), profiles.get( donation.claimed_by ),
                                  donation.claimed_by_name ) )
    start = build_stop( 'Start', acting_user, acting_user.display_name )
    return routes_prompt( start, stops )


def build_stop( label, profile, name ):
    """A named address for the route prompt."""

    address = ''
    if profile is not None:
        address = ', '.join( part for part in ( profile.address, profile.city, profile.state, profile.zip_code )
                             if part )
    return { 'name': '{} ( {} )'.format( label, name ), 'address': address }


def build_expiration_priorities_prompt( acting_user ):
    """Prioritize the available inventory a charity can claim."""

    require_role( acting_user, Role.CHARITY, 'expiration-priorities' )
    engine = get_lifecycle_engine()
    today = engine.today()
    inventory = [
        donation for donation in list_visible( engine.store, acting_user, today )
        if donation.effective_status( today ) == AVAILABLE
    ]
    if not inventory:
        return None
    return expiration_priorities_prompt( inventory )


def build_impact_prompt():
    """Platform wide impact, for any role."""

    engine = get_lifecycle_engine()
    donations = engine.store.query( order=[ DonationModel.created_at ] )
    if not donations:
        return None

    time_period = '{} to {}'.format(
        donations[ 0 ].created_at.strftime( DATE_FORMAT ), donations[ -1 ].created_at.strftime( DATE_FORMAT )
    )
    return impact_prompt( impact_stats( donations ), time_period )
