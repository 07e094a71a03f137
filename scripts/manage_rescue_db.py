"""The following script will DROP ALL tables and then CREATE ALL, and can seed a development database.

Use with caution! It will remove all existing data, and then reconstruct the tables with no entries. To run a function
navigate to the project root and, for example, on the command line type:

python -c "import scripts.manage_rescue_db;scripts.manage_rescue_db.drop_all_and_create()"
python -c "import scripts.manage_rescue_db;scripts.manage_rescue_db.create_sample_data()"
"""

from datetime import timedelta

from food_rescue.app import create_app
from food_rescue.flask_essentials import database
from food_rescue.helpers.clock import utcnow
from food_rescue.helpers.model_serialization import from_json
from food_rescue.models.donation import CATEGORIES
from food_rescue.schemas.donation import DonationSchema
from food_rescue.schemas.user_profile import UserProfileSchema
from tests.helpers.default_dictionaries import get_donation_dict
from tests.helpers.default_dictionaries import get_user_profile_dict

app = create_app( 'DEV' )  # pylint: disable=C0103


def drop_all_and_create():
    """A function to drop and then recreate the database tables."""

    with app.app_context():
        database.reflect()
        database.drop_all()
        database.create_all()


def create_sample_data():
    """Create one business, charity and volunteer, and 20 available donations from the business.

    The identity provider user IDs are made up: sign tokens with these as the subject to act as the sample users.
    """

    with app.app_context():
        profiles = {}
        for role in ( 'business', 'charity', 'volunteer' ):
            profile = from_json( UserProfileSchema(), get_user_profile_dict( {
                'email': '{}@example.org'.format( role ),
                'role': role,
                'organization_name': 'Sample {}'.format( role.title() )
            } ) )
            profile.id = 'sample-{}'.format( role )
            database.session.add( profile )
            profiles[ role ] = profile

        now = utcnow()
        for i in range( 0, 20 ):
            donation = from_json( DonationSchema(), get_donation_dict( {
                'food_name': 'Sample food {}'.format( i + 1 ),
                'category': CATEGORIES[ i % len( CATEGORIES ) ],
                'quantity': str( 5 + i ),
                'expiration_date': ( now + timedelta( days=i % 7 ) ).strftime( '%Y-%m-%d' ),
                'transport_needed': i % 2 == 0
            } ) )
            donation.donor_id = profiles[ 'business' ].id
            donation.donor_name = profiles[ 'business' ].display_name
            donation.created_at = now - timedelta( hours=i )
            database.session.add( donation )

        database.session.commit()
