"""The model for the Food Rescue API service: donation table.

Tables are explicitly named. Notice that the database=SQLAlchemy() is done through the import of flask_essentials.
This will keep the Marshmallow and model SQLAlchemy sessions the same.
"""
# pylint: disable=R0903
import uuid

from sqlalchemy import Uuid

from food_rescue.flask_essentials import database
from food_rescue.helpers.clock import utcnow

CATEGORIES = ( 'Produce', 'Dairy', 'Bakery', 'Meat', 'Prepared Foods', 'Canned Goods', 'Dry Goods', 'Other' )
UNITS = ( 'pounds', 'kg', 'servings', 'packages', 'boxes', 'items' )
STORAGE_REQUIREMENTS = ( '', 'Room Temperature', 'Refrigeration', 'Freezer', 'Keep Dry', 'Other' )

AVAILABLE = 'available'
CLAIMED = 'claimed'
DELIVERED = 'delivered'
EXPIRED = 'expired'
STATUSES = ( AVAILABLE, CLAIMED, DELIVERED, EXPIRED )


class DonationModel( database.Model ):
    """One offer of surplus food moving through the lifecycle: available, claimed and then delivered."""

    __tablename__ = 'donation'
    id = database.Column( database.Integer, primary_key=True, autoincrement=True, nullable=False )
    searchable_id = database.Column( Uuid, nullable=False, unique=True, default=uuid.uuid4 )
    donor_id = database.Column( database.VARCHAR( 128 ), nullable=False, index=True )
    donor_name = database.Column( database.VARCHAR( 128 ), nullable=False, default='' )
    food_name = database.Column( database.VARCHAR( 128 ), nullable=False )
    category = database.Column( database.Enum( *CATEGORIES, native_enum=False ), nullable=False, default='Other' )
    quantity = database.Column( database.Numeric( 10, 2 ), nullable=False )
    unit = database.Column( database.Enum( *UNITS, native_enum=False ), nullable=False, default='pounds' )
    expiration_date = database.Column( database.Date, nullable=False )
    pickup_instructions = database.Column( database.Text, nullable=False, default='' )
    description = database.Column( database.Text, nullable=False, default='' )
    storage_requirements = database.Column(
        database.Enum( *STORAGE_REQUIREMENTS, native_enum=False ), nullable=False, default=''
    )
    transport_needed = database.Column( database.Boolean, nullable=False, default=False )
    status = database.Column(
        database.Enum( *STATUSES, native_enum=False ), nullable=False, default=AVAILABLE, index=True
    )
    claimed_by = database.Column( database.VARCHAR( 128 ), nullable=True, default=None )
    claimed_by_name = database.Column( database.VARCHAR( 128 ), nullable=True, default=None )
    claimed_at = database.Column( database.DateTime, nullable=True, default=None )
    transport_volunteer_id = database.Column( database.VARCHAR( 128 ), nullable=True, default=None )
    transport_volunteer_name = database.Column( database.VARCHAR( 128 ), nullable=True, default=None )
    transport_assigned_at = database.Column( database.DateTime, nullable=True, default=None )
    delivered_by = database.Column( database.VARCHAR( 128 ), nullable=True, default=None )
    delivered_at = database.Column( database.DateTime, nullable=True, default=None )
    expired_at = database.Column( database.DateTime, nullable=True, default=None )
    created_at = database.Column( database.DateTime, nullable=False, default=utcnow, index=True )

    def is_past_expiration( self, today ):
        """Whether the expiration date is before today."""
        return self.expiration_date is not None and self.expiration_date < today

    def effective_status( self, today ):
        """The status used for visibility and aggregation: an available donation past its date is expired.

        :param date today: The date to compare the expiration date against.
        :return: One of the STATUSES.
        """

        if self.status == AVAILABLE and self.is_past_expiration( today ):
            return EXPIRED
        return self.status
