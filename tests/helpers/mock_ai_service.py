"""Mock the hosted AI service responses that requests.post() returns in the unit tests."""
# pylint: disable=too-few-public-methods
import requests

MOCK_INSIGHTS = 'Deliver the dairy first. Bundle the bakery items.'


class MockResponse:
    """The parts of a requests Response that the AI service helper reads."""

    def __init__( self, status_code, json_data ):
        self.status_code = status_code
        self.json_data = json_data

    def json( self ):
        """The decoded body; raises ValueError when the body was not JSON."""
        if self.json_data is None:
            raise ValueError( 'No JSON object could be decoded.' )
        return self.json_data


def mock_post_success( *args, **kwargs ):  # pylint: disable=unused-argument
    """A generateContent response with one candidate."""

    return MockResponse( 200, { 'candidates': [ { 'content': { 'parts': [ { 'text': MOCK_INSIGHTS } ] } } ] } )


def mock_post_server_error( *args, **kwargs ):  # pylint: disable=unused-argument
    """The service is up but failing."""

    return MockResponse( 500, { 'error': { 'message': 'Internal error.' } } )


def mock_post_malformed( *args, **kwargs ):  # pylint: disable=unused-argument
    """A 200 whose body has no candidates."""

    return MockResponse( 200, { 'promptFeedback': { 'blockReason': 'OTHER' } } )


def mock_post_timeout( *args, **kwargs ):  # pylint: disable=unused-argument
    """The service did not answer in time."""

    raise requests.exceptions.Timeout( 'Read timed out.' )
