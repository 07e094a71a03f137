"""Schema for DonationModel: lifecycle attributes are only ever written by the lifecycle engine."""
# pylint: disable=too-few-public-methods
from marshmallow import fields
from marshmallow import validate
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema

from food_rescue.flask_essentials import database
from food_rescue.models.donation import CATEGORIES
from food_rescue.models.donation import DonationModel
from food_rescue.models.donation import STATUSES
from food_rescue.models.donation import STORAGE_REQUIREMENTS
from food_rescue.models.donation import UNITS

LIFECYCLE_ATTRIBUTES = (
    'searchable_id', 'donor_id', 'donor_name', 'status', 'claimed_by', 'claimed_by_name', 'claimed_at',
    'transport_volunteer_id', 'transport_volunteer_name', 'transport_assigned_at', 'delivered_by', 'delivered_at',
    'expired_at', 'created_at'
)


class DonationSchema( SQLAlchemyAutoSchema ):
    """Marshmallow schema for serialization/deserialization of DonationModel."""

    searchable_id = fields.UUID()
    category = fields.String( validate=validate.OneOf( CATEGORIES ) )
    quantity = fields.Decimal(
        places=2, as_string=True, required=True, validate=validate.Range( min=0, min_inclusive=False )
    )
    unit = fields.String( validate=validate.OneOf( UNITS ) )
    storage_requirements = fields.String( validate=validate.OneOf( STORAGE_REQUIREMENTS ) )
    status = fields.String( validate=validate.OneOf( STATUSES ) )

    class Meta:
        """Meta object for Marshmallow schema."""

        exclude = ( 'id', )
        dump_only = LIFECYCLE_ATTRIBUTES
        model = DonationModel
        load_instance = True
        sqla_session = database.session
