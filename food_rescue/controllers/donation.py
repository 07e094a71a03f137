"""Controllers for Flask-RESTful resources: handle the business logic for the donation endpoints."""
from food_rescue.exceptions.exception_model import ModelDonationNotFoundError
from food_rescue.helpers.donation_store import DonationStore
from food_rescue.helpers.lifecycle import LifecycleEngine
from food_rescue.helpers.visibility import is_visible
from food_rescue.helpers.visibility import list_visible
from food_rescue.schemas.donation import DonationSchema


def get_lifecycle_engine():
    """The lifecycle engine on the request's database session."""
    return LifecycleEngine( DonationStore() )


def dump_donations( donations, today ):
    """Serialize donations and add the effective status each one is shown with.

    :param donations: A list of DonationModel.
    :param date today: The date used for derived expiry.
    :return: A list of dictionaries.
    """

    results = DonationSchema( many=True ).dump( donations )
    for result, donation in zip( results, donations ):
        result[ 'effective_status' ] = donation.effective_status( today )
    return results


def get_visible_donations( acting_user ):
    """The donations the acting user may see, most recent first.

    :param acting_user: UserProfileModel, or None for a user without a profile.
    :return: A list of dictionaries.
    """

    engine = get_lifecycle_engine()
    today = engine.today()
    donations = list_visible( engine.store, acting_user, today )
    return dump_donations( donations, today )


def get_donation( searchable_id, acting_user ):
    """One donation, if the acting user may see it or took part in it.

    :param str searchable_id: The donation searchable ID.
    :param acting_user: UserProfileModel, or None.
    :return: A dictionary.
    """

    engine = get_lifecycle_engine()
    today = engine.today()
    donation = engine.store.get( searchable_id )

    participants = ( donation.donor_id, donation.claimed_by, donation.transport_volunteer_id )
    taking_part = acting_user is not None and acting_user.id in participants
    if not taking_part and not is_visible( donation, acting_user, today ):
        raise ModelDonationNotFoundError()

    return dump_donations( [ donation ], today )[ 0 ]


def create_donation( payload, acting_user ):
    """List a new donation for a business.

    payload = {
        "food_name": "Bagels",
        "category": "Bakery",
        "quantity": "25",
        "unit": "items",
        "expiration_date": "2026-10-21",
        "pickup_instructions": "Back door after 6pm.",
        "description": "Day old bagels.",
        "storage_requirements": "Keep Dry",
        "transport_needed": true
    }

    :param dict payload: The donation fields.
    :param acting_user: UserProfileModel of the business.
    :return: A dictionary.
    """

    engine = get_lifecycle_engine()
    donation = engine.create( payload, acting_user )
    return dump_donations( [ donation ], engine.today() )[ 0 ]


def transition_donation( searchable_id, action, acting_user ):
    """Apply a lifecycle action: claim, assign-transport or deliver.

    :param str searchable_id: The donation searchable ID.
    :param str action: The action kind.
    :param acting_user: UserProfileModel performing the action.
    :return: A dictionary of the updated donation.
    """

    engine = get_lifecycle_engine()
    donation = engine.apply_transition( searchable_id, action, acting_user )
    return dump_donations( [ donation ], engine.today() )[ 0 ]
