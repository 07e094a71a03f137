"""Verify the identity provider's bearer token and find the acting user's profile.

The token is issued elsewhere; here it is only decoded and its subject used as the user ID.
"""
from functools import wraps

import jwt
from flask import current_app
from flask import g
from flask import request
from flask_restful import Resource

from food_rescue.exceptions.exception_jwt import JWTRequestError
from food_rescue.exceptions.exception_model import ModelUserProfileNotFoundError
from food_rescue.flask_essentials import database
from food_rescue.models.user_profile import UserProfileModel


def verify_jwt_in_request():
    """Decode the bearer token on the request and keep its claims on flask.g.

    :return: The token claims.
    """

    scheme, _, token = request.headers.get( 'Authorization', '' ).partition( ' ' )
    if scheme.lower() != 'bearer' or not token:
        raise JWTRequestError()

    try:
        claims = jwt.decode(
            token,
            current_app.config[ 'JWT_SECRET_KEY' ],
            algorithms=[ current_app.config[ 'JWT_ALGORITHM' ] ]
        )
    except jwt.ExpiredSignatureError:
        raise JWTRequestError( 'The bearer token has expired.' )
    except jwt.InvalidTokenError:
        raise JWTRequestError()

    if not claims.get( 'sub' ):
        raise JWTRequestError( 'The bearer token has no subject.' )

    g.jwt_claims = claims
    return claims


def jwt_required( function ):
    """Decorator for endpoints that need a verified bearer token."""

    @wraps( function )
    def wrapper( *args, **kwargs ):
        verify_jwt_in_request()
        return function( *args, **kwargs )

    return wrapper


def get_jwt_identity():
    """The user ID from the verified token."""
    return g.jwt_claims[ 'sub' ]


def get_acting_user( required=True ):
    """The profile of the user making the request.

    :param bool required: Raise if there is no profile, otherwise return None.
    :return: UserProfileModel or None.
    """

    profile = database.session.get( UserProfileModel, get_jwt_identity() )
    if profile is None and required:
        raise ModelUserProfileNotFoundError()
    return profile


class UserResource( Resource ):
    """A Flask-RESTful resource whose methods all need a verified bearer token."""

    method_decorators = [ jwt_required ]
