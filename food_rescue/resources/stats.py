"""Resource entry point for getting dashboard statistics."""
# pylint: disable=too-few-public-methods
# pylint: disable=no-self-use
from flask_api import status

from food_rescue.controllers.stats import get_stats
from food_rescue.helpers.jwt_auth import UserResource
from food_rescue.helpers.jwt_auth import get_acting_user


class DonationStats( UserResource ):
    """Flask-RESTful resource endpoints for summary data."""

    def get( self, stats_type ):
        """Simple endpoint to retrieve summary data: donations or impact."""

        return get_stats( stats_type, get_acting_user( required=False ) ), status.HTTP_200_OK
