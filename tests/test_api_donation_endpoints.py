"""The module tests each donation API endpoint to ensure a request is successfully made and valid data returned."""
import datetime
import json
import unittest

from flask_api import status

from food_rescue.app import create_app
from food_rescue.flask_essentials import database
from food_rescue.models.donation import DonationModel
from tests.helpers.default_dictionaries import PAST_EXPIRATION_DATE
from tests.helpers.default_dictionaries import get_donation_dict
from tests.helpers.mock_jwt_functions import get_access_token
from tests.helpers.mock_jwt_functions import get_headers
from tests.helpers.model_helpers import create_donation
from tests.helpers.model_helpers import create_model_list
from tests.helpers.model_helpers import create_user_profile


class APIDonationEndpointsTestCase( unittest.TestCase ):
    """This test suite is designed to verify the basic functionality of the API donation endpoints.

    python -m unittest discover -v
    python -m unittest -v tests.test_api_donation_endpoints.APIDonationEndpointsTestCase
    python -m unittest -v tests.test_api_donation_endpoints.APIDonationEndpointsTestCase.test_claim_donation
    """

    def setUp( self ):
        self.app = create_app( 'TEST' )
        self.app.testing = True
        self.test_client = self.app.test_client()
        with self.app.app_context():
            database.reflect()
            database.drop_all()
            database.create_all()

    def tearDown( self ):
        with self.app.app_context():
            database.session.commit()
            database.session.close()

    def create_users( self ):
        """A business, a charity and a volunteer with profiles."""

        create_user_profile( 'business-1', 'business' )
        create_user_profile( 'charity-c', 'charity' )
        create_user_profile( 'volunteer-1', 'volunteer', { 'can_transport': True } )

    def test_create_donation( self ):
        """Business lists a donation API ( methods = [ POST ] )."""

        with self.app.app_context():
            self.create_users()
            url = '/rescue/donations'

            response = self.test_client.post(
                url, data=json.dumps( get_donation_dict( { 'quantity': '25' } ) ), headers=get_headers( 'business-1' )
            )
            self.assertEqual( response.status_code, status.HTTP_201_CREATED )

            data_returned = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data_returned[ 'status' ], 'available' )
            self.assertEqual( data_returned[ 'effective_status' ], 'available' )
            self.assertEqual( data_returned[ 'quantity' ], '25.00' )
            self.assertEqual( data_returned[ 'donor_id' ], 'business-1' )
            self.assertIn( 'searchable_id', data_returned )
            self.assertNotIn( 'id', data_returned )
            self.assertEqual( DonationModel.query.count(), 1 )

    def test_create_donation_lifecycle_fields_ignored( self ):
        """Lifecycle attributes in the payload are not taken from the client."""

        with self.app.app_context():
            self.create_users()
            payload = get_donation_dict()
            payload.update( { 'status': 'delivered', 'claimed_by': 'charity-c', 'donor_id': 'business-9' } )

            response = self.test_client.post(
                '/rescue/donations', data=json.dumps( payload ), headers=get_headers( 'business-1' )
            )
            self.assertEqual( response.status_code, status.HTTP_201_CREATED )

            data_returned = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data_returned[ 'status' ], 'available' )
            self.assertIsNone( data_returned[ 'claimed_by' ] )
            self.assertEqual( data_returned[ 'donor_id' ], 'business-1' )

    def test_create_donation_invalid( self ):
        """A non positive quantity or a unit outside the enumeration is a 422."""

        with self.app.app_context():
            self.create_users()
            url = '/rescue/donations'

            for update in ( { 'quantity': '0' }, { 'quantity': '-3' }, { 'unit': 'tons' }, { 'category': 'Candy' } ):
                response = self.test_client.post(
                    url, data=json.dumps( get_donation_dict( update ) ), headers=get_headers( 'business-1' )
                )
                self.assertEqual( response.status_code, 422 )
            self.assertEqual( DonationModel.query.count(), 0 )

    def test_create_donation_not_business( self ):
        """A charity can not list a donation: 403."""

        with self.app.app_context():
            self.create_users()
            response = self.test_client.post(
                '/rescue/donations', data=json.dumps( get_donation_dict() ), headers=get_headers( 'charity-c' )
            )
            self.assertEqual( response.status_code, status.HTTP_403_FORBIDDEN )

    def test_donations_without_token( self ):
        """Every donation endpoint needs a valid bearer token: 401."""

        with self.app.app_context():
            response = self.test_client.get( '/rescue/donations' )
            self.assertEqual( response.status_code, status.HTTP_401_UNAUTHORIZED )

            headers = { 'Authorization': 'Bearer {}'.format( get_access_token( 'charity-c', secret='wrong' ) ) }
            response = self.test_client.get( '/rescue/donations', headers=headers )
            self.assertEqual( response.status_code, status.HTTP_401_UNAUTHORIZED )

            expired_token = get_access_token( 'charity-c', expires_in=datetime.timedelta( hours=-1 ) )
            response = self.test_client.get(
                '/rescue/donations', headers={ 'Authorization': 'Bearer {}'.format( expired_token ) }
            )
            self.assertEqual( response.status_code, status.HTTP_401_UNAUTHORIZED )
            self.assertEqual( json.loads( response.data.decode( 'utf-8' ) ), 'The bearer token has expired.' )

    def test_get_donations( self ):
        """Retrieve the donations visible to each role API ( methods = [ GET ] )."""

        with self.app.app_context():
            self.create_users()
            create_model_list( None, None, 12 )
            create_donation( { 'expiration_date': PAST_EXPIRATION_DATE } )
            create_donation( { 'transport_needed': True }, { 'status': 'claimed', 'claimed_by': 'charity-c' } )
            url = '/rescue/donations'

            response = self.test_client.get( url, headers=get_headers( 'business-1' ) )
            self.assertEqual( response.status_code, status.HTTP_200_OK )
            self.assertEqual( len( json.loads( response.data.decode( 'utf-8' ) ) ), 10 )

            response = self.test_client.get( url, headers=get_headers( 'charity-c' ) )
            data_returned = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( len( data_returned ), 13 )
            self.assertNotIn( 'expired', [ donation[ 'effective_status' ] for donation in data_returned ] )

            response = self.test_client.get( url, headers=get_headers( 'volunteer-1' ) )
            data_returned = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( len( data_returned ), 1 )
            self.assertEqual( data_returned[ 0 ][ 'status' ], 'claimed' )

            # A token for an identity without a profile gets the public feed.
            response = self.test_client.get( url, headers=get_headers( 'newcomer-1' ) )
            self.assertEqual( len( json.loads( response.data.decode( 'utf-8' ) ) ), 10 )

    def test_get_donation_effective_status( self ):
        """A donation past its date is shown expired although the stored status is available."""

        with self.app.app_context():
            self.create_users()
            donation = create_donation( { 'expiration_date': PAST_EXPIRATION_DATE } )
            url = '/rescue/donations/{}'.format( donation.searchable_id )

            response = self.test_client.get( url, headers=get_headers( 'business-1' ) )
            self.assertEqual( response.status_code, status.HTTP_200_OK )

            data_returned = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data_returned[ 'status' ], 'available' )
            self.assertEqual( data_returned[ 'effective_status' ], 'expired' )

    def test_get_donation_not_visible( self ):
        """A donation the user may not see is not found: 404."""

        with self.app.app_context():
            self.create_users()
            donation = create_donation()
            url = '/rescue/donations/{}'.format( donation.searchable_id )

            response = self.test_client.get( url, headers=get_headers( 'volunteer-1' ) )
            self.assertEqual( response.status_code, status.HTTP_404_NOT_FOUND )

            response = self.test_client.get( '/rescue/donations/not-a-uuid', headers=get_headers( 'charity-c' ) )
            self.assertEqual( response.status_code, status.HTTP_404_NOT_FOUND )

    def test_claim_donation( self ):
        """Charity claims a donation API ( methods = [ PUT ] ); a second claim is a conflict."""

        with self.app.app_context():
            self.create_users()
            create_user_profile( 'charity-d', 'charity' )
            donation = create_donation( { 'quantity': '25' } )
            url = '/rescue/donations/{}/claim'.format( donation.searchable_id )

            response = self.test_client.put( url, headers=get_headers( 'charity-c' ) )
            self.assertEqual( response.status_code, status.HTTP_200_OK )

            data_returned = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data_returned[ 'status' ], 'claimed' )
            self.assertEqual( data_returned[ 'claimed_by' ], 'charity-c' )
            self.assertIsNotNone( data_returned[ 'claimed_at' ] )

            response = self.test_client.put( url, headers=get_headers( 'charity-d' ) )
            self.assertEqual( response.status_code, status.HTTP_409_CONFLICT )
            self.assertEqual(
                json.loads( response.data.decode( 'utf-8' ) ), 'This donation was already claimed.'
            )

    def test_claim_donation_errors( self ):
        """Wrong role 403, expired 409, unknown action 422, no profile 404, unknown donation 404."""

        with self.app.app_context():
            self.create_users()
            donation = create_donation()
            expired = create_donation( { 'expiration_date': PAST_EXPIRATION_DATE } )

            url = '/rescue/donations/{}/claim'.format( donation.searchable_id )
            response = self.test_client.put( url, headers=get_headers( 'volunteer-1' ) )
            self.assertEqual( response.status_code, status.HTTP_403_FORBIDDEN )

            response = self.test_client.put( url, headers=get_headers( 'newcomer-1' ) )
            self.assertEqual( response.status_code, status.HTTP_404_NOT_FOUND )

            url = '/rescue/donations/{}/claim'.format( expired.searchable_id )
            response = self.test_client.put( url, headers=get_headers( 'charity-c' ) )
            self.assertEqual( response.status_code, status.HTTP_409_CONFLICT )
            self.assertEqual( json.loads( response.data.decode( 'utf-8' ) ), 'This donation has expired.' )

            url = '/rescue/donations/{}/unclaim'.format( donation.searchable_id )
            response = self.test_client.put( url, headers=get_headers( 'charity-c' ) )
            self.assertEqual( response.status_code, 422 )

            url = '/rescue/donations/00000000-0000-0000-0000-000000000000/claim'
            response = self.test_client.put( url, headers=get_headers( 'charity-c' ) )
            self.assertEqual( response.status_code, status.HTTP_404_NOT_FOUND )

    def test_transport_and_deliver( self ):
        """Claim, assign transport and deliver through the API; each step is visible to the next actor."""

        with self.app.app_context():
            self.create_users()
            create_user_profile( 'volunteer-2', 'volunteer' )
            donation = create_donation( { 'transport_needed': True } )
            base_url = '/rescue/donations/{}/'.format( donation.searchable_id )

            response = self.test_client.put( base_url + 'claim', headers=get_headers( 'charity-c' ) )
            self.assertEqual( response.status_code, status.HTTP_200_OK )

            response = self.test_client.get( '/rescue/donations', headers=get_headers( 'volunteer-1' ) )
            self.assertEqual( len( json.loads( response.data.decode( 'utf-8' ) ) ), 1 )

            response = self.test_client.put( base_url + 'assign-transport', headers=get_headers( 'volunteer-1' ) )
            self.assertEqual( response.status_code, status.HTTP_200_OK )
            data_returned = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data_returned[ 'transport_volunteer_id' ], 'volunteer-1' )
            self.assertEqual( data_returned[ 'status' ], 'claimed' )

            response = self.test_client.put( base_url + 'assign-transport', headers=get_headers( 'volunteer-2' ) )
            self.assertEqual( response.status_code, status.HTTP_409_CONFLICT )

            response = self.test_client.get( '/rescue/donations', headers=get_headers( 'volunteer-2' ) )
            self.assertEqual( json.loads( response.data.decode( 'utf-8' ) ), [] )

            response = self.test_client.put( base_url + 'deliver', headers=get_headers( 'charity-c' ) )
            self.assertEqual( response.status_code, status.HTTP_403_FORBIDDEN )

            response = self.test_client.put( base_url + 'deliver', headers=get_headers( 'volunteer-1' ) )
            self.assertEqual( response.status_code, status.HTTP_200_OK )
            self.assertEqual( json.loads( response.data.decode( 'utf-8' ) )[ 'status' ], 'delivered' )

            response = self.test_client.put( base_url + 'deliver', headers=get_headers( 'charity-c' ) )
            self.assertEqual( response.status_code, status.HTTP_409_CONFLICT )

            # The participants still find the delivered donation.
            for user_id in ( 'business-1', 'charity-c', 'volunteer-1' ):
                response = self.test_client.get( base_url.rstrip( '/' ), headers=get_headers( user_id ) )
                self.assertEqual( response.status_code, status.HTTP_200_OK )

    def test_assign_transport_not_eligible( self ):
        """Transport on a donation that does not need it: 422."""

        with self.app.app_context():
            self.create_users()
            donation = create_donation( lifecycle_values={ 'status': 'claimed', 'claimed_by': 'charity-c' } )
            url = '/rescue/donations/{}/assign-transport'.format( donation.searchable_id )

            response = self.test_client.put( url, headers=get_headers( 'volunteer-1' ) )
            self.assertEqual( response.status_code, 422 )

    def test_get_stats( self ):
        """Dashboard statistics API ( methods = [ GET ] )."""

        with self.app.app_context():
            self.create_users()
            create_donation( { 'quantity': '25' } )
            create_donation( lifecycle_values={ 'status': 'claimed', 'claimed_by': 'charity-c' } )
            create_donation( lifecycle_values={ 'status': 'delivered', 'claimed_by': 'charity-c' } )
            create_donation( { 'expiration_date': PAST_EXPIRATION_DATE } )
            create_donation( lifecycle_values={ 'donor_id': 'business-2' } )

            response = self.test_client.get( '/rescue/stats/donations', headers=get_headers( 'business-1' ) )
            self.assertEqual( response.status_code, status.HTTP_200_OK )
            data_returned = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual(
                data_returned[ 'status_counts' ],
                { 'total': 4, 'available': 1, 'claimed': 1, 'delivered': 1, 'expired': 1 }
            )

            response = self.test_client.get( '/rescue/stats/impact', headers=get_headers( 'volunteer-1' ) )
            self.assertEqual( response.status_code, status.HTTP_200_OK )
            data_returned = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data_returned[ 'total_donations' ], 5 )
            self.assertEqual( data_returned[ 'donor_count' ], 2 )
            self.assertEqual( data_returned[ 'claimant_count' ], 1 )
            self.assertEqual( data_returned[ 'total_quantity' ], '125.00' )

            response = self.test_client.get( '/rescue/stats/bogus', headers=get_headers( 'business-1' ) )
            self.assertEqual( response.status_code, status.HTTP_404_NOT_FOUND )

    def test_business_stats_unbounded( self ):
        """The business dashboard counts every own donation, not only the ten most recent."""

        with self.app.app_context():
            self.create_users()
            create_model_list( None, None, 12 )

            response = self.test_client.get( '/rescue/stats/donations', headers=get_headers( 'business-1' ) )
            data_returned = json.loads( response.data.decode( 'utf-8' ) )
            self.assertEqual( data_returned[ 'status_counts' ][ 'total' ], 12 )

    def test_get_enumeration( self ):
        """Retrieve the closed enumerations for the forms API ( methods = [ GET ] )."""

        with self.app.app_context():
            url = '/rescue/enumeration/donationmodel/unit'
            response = self.test_client.get( url, headers=get_headers( 'business-1' ) )
            self.assertEqual( response.status_code, status.HTTP_200_OK )
            self.assertEqual(
                json.loads( response.data.decode( 'utf-8' ) ),
                [ 'pounds', 'kg', 'servings', 'packages', 'boxes', 'items' ]
            )

            url = '/rescue/enumeration/userprofilemodel/role'
            response = self.test_client.get( url, headers=get_headers( 'business-1' ) )
            self.assertEqual( json.loads( response.data.decode( 'utf-8' ) ), [ 'business', 'charity', 'volunteer' ] )

            url = '/rescue/enumeration/donationmodel/food_name'
            response = self.test_client.get( url, headers=get_headers( 'business-1' ) )
            self.assertEqual( response.status_code, status.HTTP_404_NOT_FOUND )

            url = '/rescue/enumeration/giftmodel/unit'
            response = self.test_client.get( url, headers=get_headers( 'business-1' ) )
            self.assertEqual( response.status_code, status.HTTP_404_NOT_FOUND )

    def test_heartbeat( self ):
        """The heartbeat answers without a token."""

        with self.app.app_context():
            response = self.test_client.get( '/rescue/heartbeat' )
            self.assertEqual( response.status_code, status.HTTP_200_OK )
            self.assertEqual( json.loads( response.data.decode( 'utf-8' ) ), { 'store': 'available' } )
