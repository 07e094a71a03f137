"""Resource entry point for the optional AI insights."""
# pylint: disable=too-few-public-methods
# pylint: disable=no-self-use
from flask import request
from flask_api import status

from food_rescue.controllers.insights import get_insights
from food_rescue.helpers.jwt_auth import UserResource
from food_rescue.helpers.jwt_auth import get_acting_user


class DonationInsights( UserResource ):
    """Flask-RESTful resource endpoint for AI insights. An unavailable AI service is a notice, not an error."""

    def get( self, insight_type ):
        """Insights of the given type: matching, waste-patterns, routes, expiration-priorities or impact.

        The matching insight takes the donation on the query string: ?donation=<searchable_id>
        """

        insights = get_insights( insight_type, get_acting_user(), request.args.get( 'donation' ) )
        return insights, status.HTTP_200_OK
