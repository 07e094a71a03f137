"""Marshmallow schema module for UserProfileModel."""
# pylint: disable=too-few-public-methods
from marshmallow import fields
from marshmallow import validate
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema

from food_rescue.flask_essentials import database
from food_rescue.models.user_profile import ROLES
from food_rescue.models.user_profile import UserProfileModel


class UserProfileSchema( SQLAlchemyAutoSchema ):
    """Marshmallow schema for serialization/deserialization of UserProfileModel."""

    email = fields.Email( required=True )
    role = fields.String( required=True, validate=validate.OneOf( ROLES ) )
    transport_radius = fields.Integer( allow_none=True, validate=validate.Range( min=0 ) )

    class Meta:
        """Meta object for Marshmallow schema."""

        dump_only = ( 'id', 'created_at', 'last_updated' )
        model = UserProfileModel
        load_instance = True
        sqla_session = database.session
