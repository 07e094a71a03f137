"""The module tests the job that persists the expiry of donations past their expiration date."""
import unittest

from food_rescue.app import create_app
from food_rescue.flask_essentials import database
from food_rescue.helpers.donation_store import DonationStore
from jobs.expiry_sweep import sweep_expired_donations
from tests.helpers.default_dictionaries import PAST_EXPIRATION_DATE
from tests.helpers.model_helpers import create_donation


class ExpirySweepTestCase( unittest.TestCase ):
    """This test suite verifies the sweep writes expired only where the derived status already says so.

    python -m unittest -v tests.test_expiry_sweep.ExpirySweepTestCase
    """

    def setUp( self ):
        self.app = create_app( 'TEST' )
        self.app.testing = True
        with self.app.app_context():
            database.reflect()
            database.drop_all()
            database.create_all()

    def tearDown( self ):
        with self.app.app_context():
            database.session.commit()
            database.session.close()

    def test_sweep( self ):
        """Only available donations past their date are expired; claimed ones keep their claim."""

        with self.app.app_context():
            past = create_donation( { 'expiration_date': PAST_EXPIRATION_DATE } )
            claimed_past = create_donation(
                { 'expiration_date': PAST_EXPIRATION_DATE }, { 'status': 'claimed', 'claimed_by': 'charity-c' }
            )
            current = create_donation()
            searchable_ids = [ past.searchable_id, claimed_past.searchable_id, current.searchable_id ]

        self.assertEqual( sweep_expired_donations( self.app ), 1 )

        with self.app.app_context():
            store = DonationStore()
            statuses = [ store.get( searchable_id ).status for searchable_id in searchable_ids ]
            self.assertEqual( statuses, [ 'expired', 'claimed', 'available' ] )
            self.assertIsNotNone( store.get( searchable_ids[ 0 ] ).expired_at )

        # A second sweep has nothing left to do.
        self.assertEqual( sweep_expired_donations( self.app ), 0 )
