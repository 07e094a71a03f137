"""Prompts for the optional AI insights, and the call that degrades to a notice when the service fails."""
import logging
from collections import OrderedDict

from food_rescue.exceptions.exception_ai_service import AIServiceUnavailableError
from food_rescue.helpers.ai_service import summarize
from food_rescue.helpers.donation_stats import quantity_of

DATE_FORMAT = '%Y-%m-%d'

INSIGHT_NOTICES = {
    'matching': 'Unable to generate AI recommendations at this time.',
    'waste-patterns': 'Unable to generate waste pattern analysis at this time.',
    'routes': 'Unable to generate route optimization at this time.',
    'expiration-priorities': 'Unable to generate expiration priorities at this time.',
    'impact': 'Unable to generate impact insights at this time.'
}


def matching_prompt( donation, charities ):
    """Rank the charities for one donation."""

    charity_lines = []
    for index, charity in enumerate( charities, start=1 ):
        location = ', '.join( part for part in ( charity.city, charity.state ) if part ) or 'Unknown'
        charity_lines.append(
            '{}. {}\n   - Location: {}\n   - About: {}'.format(
                index, charity.display_name, location, charity.bio or 'Various populations'
            )
        )

    return '\n'.join( [
        'I have a food donation with the following details:',
        '- Food type: {}'.format( donation.food_name ),
        '- Category: {}'.format( donation.category ),
        '- Quantity: {} {}'.format( donation.quantity, donation.unit ),
        '- Expiration date: {}'.format( donation.expiration_date.strftime( DATE_FORMAT ) ),
        '- Storage requirements: {}'.format( donation.storage_requirements or 'Not specified' ),
        '- Transport needed: {}'.format( 'Yes' if donation.transport_needed else 'No' ),
        '',
        'Here are potential recipient organizations:',
        '\n'.join( charity_lines ) or 'None listed.',
        '',
        'Based on this information, provide the following:',
        '1. Rank the top 3 best matching organizations for this donation and explain why',
        '2. Any food safety considerations specific to this donation',
        '3. Suggest optimal transportation arrangements based on the food type and quantity'
    ] )


def waste_patterns_prompt( donations ):
    """Analyze a business's donation history by category."""

    by_category = OrderedDict()
    for donation in donations:
        by_category.setdefault( donation.category, 0 )
        by_category[ donation.category ] += quantity_of( donation )

    dates = sorted( donation.created_at for donation in donations if donation.created_at )
    if dates:
        time_period = '{} to {}'.format( dates[ 0 ].strftime( DATE_FORMAT ), dates[ -1 ].strftime( DATE_FORMAT ) )
    else:
        time_period = 'Unknown'
    unit = donations[ 0 ].unit if donations else 'units'

    return '\n'.join( [
        'Here is a summary of food donations by category (in {}):'.format( unit ),
        '\n'.join( '- {}: {}'.format( category, quantity ) for category, quantity in by_category.items() ),
        '',
        'Total number of donations: {}'.format( len( donations ) ),
        'Time period: {}'.format( time_period ),
        '',
        'Based on this donation pattern:',
        '1. Identify potential waste reduction opportunities',
        '2. Suggest 3 actionable strategies to optimize food donation and reduce waste',
        '3. Provide insights on seasonal trends if applicable',
        '4. Recommend inventory management improvements'
    ] )


def routes_prompt( start, stops ):
    """Order a volunteer's pickups and drop offs.

    :param dict start: { 'name': ..., 'address': ... } where the volunteer starts.
    :param list stops: A list of { 'name': ..., 'address': ... }.
    """

    stop_lines = [
        'Location {}: {}, {}'.format( index, stop[ 'name' ], stop[ 'address' ] or 'Address not given' )
        for index, stop in enumerate( stops, start=1 )
    ]

    return '\n'.join( [
        'I need to optimize a delivery route for food donations.',
        '',
        'Starting point: {}, {}'.format( start[ 'name' ], start[ 'address' ] or 'Address not given' ),
        '',
        'Pickup and delivery points:',
        '\n'.join( stop_lines ),
        '',
        'Please provide:',
        '1. An optimized route order to minimize total travel distance, picking up each donation before delivering it',
        '2. Estimated total distance and time required',
        '3. Any special considerations for food transportation',
        '4. Suggestions for time windows to ensure food safety'
    ] )


def expiration_priorities_prompt( donations ):
    """Prioritize the available inventory by expiration."""

    inventory_lines = [
        '- {} ({}): Quantity: {} {}, Listed on: {}, Expires: {}'.format(
            donation.food_name,
            donation.category,
            donation.quantity,
            donation.unit,
            donation.created_at.strftime( DATE_FORMAT ) if donation.created_at else 'Unknown',
            donation.expiration_date.strftime( DATE_FORMAT )
        )
        for donation in donations
    ]

    return '\n'.join( [
        'Here is the current inventory of food donations:',
        '\n'.join( inventory_lines ),
        '',
        'Based on this inventory:',
        '1. Prioritize items that need immediate distribution (high, medium, low priority)',
        '2. Suggest appropriate recipient types for each high-priority item',
        '3. Recommend storage adjustments to maximize shelf life',
        '4. Identify items that may need to be bundled together for efficient distribution'
    ] )


def impact_prompt( impact, time_period ):
    """Summarize the platform impact for stakeholders.

    :param dict impact: The result of donation_stats.impact_stats().
    :param str time_period: A human readable period.
    """

    return '\n'.join( [
        'Here is the impact data from our food rescue platform:',
        '- Total food rescued: {}'.format( impact[ 'total_quantity' ] ),
        '- Food rescued by category: {}'.format(
            ', '.join( '{} {}'.format( quantity, category )
                       for category, quantity in impact[ 'quantity_by_category' ].items() ) or 'None'
        ),
        '- Number of donations: {}'.format( impact[ 'total_donations' ] ),
        '- Number of businesses participating: {}'.format( impact[ 'donor_count' ] ),
        '- Number of recipient organizations: {}'.format( impact[ 'claimant_count' ] ),
        '- Number of volunteers: {}'.format( impact[ 'volunteer_count' ] ),
        '- Time period: {}'.format( time_period ),
        '',
        'Based on this impact data:',
        '1. Provide a compelling summary of the social impact',
        '2. Generate 3 data-driven insights about the program\'s effectiveness',
        '3. Suggest 2-3 ways to increase participation and impact',
        '4. Suggest how to better communicate these impacts to stakeholders'
    ] )


def generate_insights( insight_type, prompt_text ):
    """Ask the AI service for insights. A failed call becomes a notice for the user and is never raised.

    :param str insight_type: One of the INSIGHT_NOTICES keys.
    :param str prompt_text: The prompt.
    :return: { 'insight_type': ..., 'insights': text or None, 'notice': None or text }
    """

    try:
        insights = summarize( prompt_text )
    except AIServiceUnavailableError as error:
        logging.warning( 'Insights %s degraded: %s', insight_type, error.message )
        return { 'insight_type': insight_type, 'insights': None, 'notice': INSIGHT_NOTICES[ insight_type ] }

    return { 'insight_type': insight_type, 'insights': insights, 'notice': None }
