"""Summary counters for the dashboards: pure reductions over a list of donations."""
import logging
from collections import OrderedDict
from decimal import Decimal
from decimal import InvalidOperation

from food_rescue.models.donation import AVAILABLE
from food_rescue.models.donation import CATEGORIES
from food_rescue.models.donation import CLAIMED
from food_rescue.models.donation import DELIVERED
from food_rescue.models.donation import EXPIRED


def quantity_of( donation ):
    """The quantity as a Decimal. A malformed quantity counts as zero so one bad record can not break a dashboard."""

    try:
        quantity = Decimal( str( donation.quantity ) )
    except ( InvalidOperation, TypeError, ValueError ):
        quantity = None

    if quantity is None or not quantity.is_finite():
        logging.warning( 'Donation %s has a malformed quantity: %r', donation.searchable_id, donation.quantity )
        return Decimal( '0.00' )
    return quantity


def donation_status_counts( donations, today ):
    """Count donations by effective status: an available donation past its expiration date counts as expired.

    :param donations: An iterable of DonationModel.
    :param date today: The date used for derived expiry.
    :return: A dictionary with total, available, claimed, delivered and expired.
    """

    counts = { 'total': 0, AVAILABLE: 0, CLAIMED: 0, DELIVERED: 0, EXPIRED: 0 }
    for donation in donations:
        counts[ 'total' ] += 1
        counts[ donation.effective_status( today ) ] += 1
    return counts


def impact_stats( donations ):
    """Platform wide impact: who took part and how much food moved.

    :param donations: An iterable of DonationModel.
    :return: A dictionary of counts and quantity totals. Quantities are strings to keep their precision in JSON.
    """

    donors = set()
    claimants = set()
    volunteers = set()
    total_quantity = Decimal( '0.00' )
    quantity_by_category = OrderedDict( ( category, Decimal( '0.00' ) ) for category in CATEGORIES )
    total_donations = 0

    for donation in donations:
        total_donations += 1
        donors.add( donation.donor_id )
        if donation.claimed_by:
            claimants.add( donation.claimed_by )
        if donation.transport_volunteer_id:
            volunteers.add( donation.transport_volunteer_id )

        quantity = quantity_of( donation )
        total_quantity += quantity
        category = donation.category if donation.category in quantity_by_category else 'Other'
        quantity_by_category[ category ] += quantity

    return {
        'total_donations': total_donations,
        'donor_count': len( donors ),
        'claimant_count': len( claimants ),
        'volunteer_count': len( volunteers ),
        'total_quantity': str( total_quantity ),
        'quantity_by_category': {
            category: str( quantity ) for category, quantity in quantity_by_category.items() if quantity
        }
    }


def compute_stats( donations, today ):
    """Both reductions over the same donations."""

    donations = list( donations )
    return {
        'status_counts': donation_status_counts( donations, today ),
        'impact': impact_stats( donations )
    }
