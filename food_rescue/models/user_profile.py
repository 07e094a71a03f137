"""The model for the Food Rescue API service: user_profile table.

The profile ID is the subject of the identity provider token, and so it is shared with the identity record.
"""
# pylint: disable=R0903
import enum

from food_rescue.flask_essentials import database
from food_rescue.helpers.clock import utcnow


class Role( enum.Enum ):
    """The closed set of account roles. The role decides which lifecycle actions a user may perform."""

    BUSINESS = 'business'
    CHARITY = 'charity'
    VOLUNTEER = 'volunteer'


ROLES = tuple( role.value for role in Role )


class UserProfileModel( database.Model ):
    """An account: a business donating food, a charity receiving it, or a volunteer transporting it."""

    __tablename__ = 'user_profile'
    id = database.Column( database.VARCHAR( 128 ), primary_key=True, nullable=False )
    email = database.Column( database.VARCHAR( 128 ), nullable=False, unique=True )
    role = database.Column( database.Enum( *ROLES, native_enum=False ), nullable=False )
    organization_name = database.Column( database.VARCHAR( 128 ), nullable=False, default='' )
    contact_name = database.Column( database.VARCHAR( 128 ), nullable=False, default='' )
    phone = database.Column( database.VARCHAR( 32 ), nullable=False, default='' )
    address = database.Column( database.VARCHAR( 256 ), nullable=False, default='' )
    city = database.Column( database.VARCHAR( 64 ), nullable=False, default='' )
    state = database.Column( database.VARCHAR( 64 ), nullable=False, default='' )
    zip_code = database.Column( database.VARCHAR( 16 ), nullable=False, default='' )
    bio = database.Column( database.Text, nullable=False, default='' )
    can_transport = database.Column( database.Boolean, nullable=False, default=False )
    transport_radius = database.Column( database.Integer, nullable=True, default=None )
    created_at = database.Column( database.DateTime, nullable=False, default=utcnow )
    last_updated = database.Column( database.DateTime, nullable=True, default=None )

    @property
    def display_name( self ):
        """The name shown on donations: the organization name, falling back to the email."""
        return self.organization_name or self.email

    @property
    def role_type( self ):
        """The role as a Role member. Raises ValueError for a role outside the enumeration."""
        return Role( self.role )
