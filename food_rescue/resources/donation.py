"""The Resources entry point for listing, creating and transitioning donations."""
from flask import request
from flask_api import status

from food_rescue.controllers.donation import create_donation
from food_rescue.controllers.donation import get_donation
from food_rescue.controllers.donation import get_visible_donations
from food_rescue.controllers.donation import transition_donation
from food_rescue.helpers.jwt_auth import UserResource
from food_rescue.helpers.jwt_auth import get_acting_user
# pylint: disable=too-few-public-methods
# pylint: disable=no-self-use


class Donations( UserResource ):
    """Flask-RESTful resource endpoints for the donations a user sees, and for listing a new donation."""

    def get( self ):
        """The donations visible to the acting user, most recent first. A user without a profile sees the feed."""

        acting_user = get_acting_user( required=False )
        return get_visible_donations( acting_user ), status.HTTP_200_OK

    def post( self ):
        """A business lists a new donation."""

        acting_user = get_acting_user()
        donation = create_donation( request.get_json() or {}, acting_user )
        return donation, status.HTTP_201_CREATED


class DonationBySearchableId( UserResource ):
    """Flask-RESTful resource endpoint for one donation."""

    def get( self, searchable_id ):
        """Return the donation if the acting user may see it."""

        acting_user = get_acting_user( required=False )
        return get_donation( searchable_id, acting_user ), status.HTTP_200_OK


class DonationTransition( UserResource ):
    """Flask-RESTful resource endpoint for the lifecycle actions: claim, assign-transport and deliver."""

    def put( self, searchable_id, action ):
        """Apply the action to the donation on behalf of the acting user."""

        acting_user = get_acting_user()
        return transition_donation( searchable_id, action, acting_user ), status.HTTP_200_OK
