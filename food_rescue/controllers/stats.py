"""Controllers for Flask-RESTful resources: handle the business logic for the dashboard statistics."""
from food_rescue.controllers.donation import get_lifecycle_engine
from food_rescue.helpers.donation_stats import compute_stats
from food_rescue.helpers.donation_stats import impact_stats
from food_rescue.helpers.visibility import list_visible

STATS_TYPES = ( 'donations', 'impact' )


def get_stats( stats_type, acting_user ):
    """Summary counters for a dashboard.

    donations: status counts and impact over the donations the acting user sees, e.g. a business's own donations.
    impact: platform wide impact over every donation.

    :param str stats_type: One of STATS_TYPES.
    :param acting_user: UserProfileModel, or None.
    :return: A dictionary.
    """

    engine = get_lifecycle_engine()
    if stats_type == 'donations':
        donations = list_visible( engine.store, acting_user, engine.today(), bounded=False )
        return compute_stats( donations, engine.today() )
    if stats_type == 'impact':
        return impact_stats( engine.store.query() )

    raise KeyError( 'The statistics type {} does not exist.'.format( stats_type ) )
