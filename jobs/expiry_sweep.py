"""Persist the expiry of available donations whose expiration date has passed.

Expiry is always derived when donations are read, so the application is correct without this job. Running it, e.g.
nightly, makes the stored status agree with the derived one. Each expiry is written with the same compare-and-set as
the lifecycle actions, and so a donation claimed while the sweep runs keeps its claim.

python -c "import jobs.expiry_sweep;jobs.expiry_sweep.sweep_expired_donations()"
"""
import logging
import os

from food_rescue.app import create_app
from food_rescue.helpers.donation_store import DonationStore
from food_rescue.helpers.lifecycle import LifecycleEngine
from food_rescue.models.donation import AVAILABLE
from food_rescue.models.donation import DonationModel


def sweep_expired_donations( app=None ):
    """Write the expired status on every available donation past its expiration date.

    :param app: The Flask application, built from APP_ENV when not provided.
    :return: The number of donations expired.
    """

    if app is None:
        app = create_app( os.environ.get( 'APP_ENV', 'DEFAULT' ) )

    with app.app_context():
        engine = LifecycleEngine( DonationStore() )
        candidates = engine.store.query(
            filters=[ DonationModel.status == AVAILABLE, DonationModel.expiration_date < engine.today() ]
        )

        expired = 0
        for donation in candidates:
            if engine.expire( donation ):
                expired += 1

        logging.info( '***** Expiry sweep: %s of %s candidate donations expired.', expired, len( candidates ) )
        return expired
