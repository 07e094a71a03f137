"""The Resources entry point for user profiles."""
from flask import request
from flask_api import status

from food_rescue.controllers.user_profile import create_user_profile
from food_rescue.controllers.user_profile import get_user_profile
from food_rescue.controllers.user_profile import update_user_profile
from food_rescue.helpers.jwt_auth import UserResource
from food_rescue.helpers.jwt_auth import get_jwt_identity
# pylint: disable=too-few-public-methods
# pylint: disable=no-self-use


class UserProfiles( UserResource ):
    """Flask-RESTful resource endpoint to create the profile of the token's identity."""

    def post( self ):
        """Create the profile: email, role and organization name."""

        profile = create_user_profile( get_jwt_identity(), request.get_json() or {} )
        return profile, status.HTTP_201_CREATED


class UserProfileMe( UserResource ):
    """Flask-RESTful resource endpoints for the acting user's own profile."""

    def get( self ):
        """Return the profile."""
        return get_user_profile( get_jwt_identity() ), status.HTTP_200_OK

    def put( self ):
        """Update the contact details on the profile."""
        return update_user_profile( get_jwt_identity(), request.get_json() or {} ), status.HTTP_200_OK
