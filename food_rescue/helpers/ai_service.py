"""Helper for the hosted generative text service: prompt text in, summary text out."""
import logging

import requests
from flask import current_app
from flask_api import status

from food_rescue.exceptions.exception_ai_service import AIServiceUnavailableError


def summarize( prompt_text ):
    """POST the prompt to the generateContent endpoint and return the text of the first candidate.

    The call is best effort: any failure is raised as AIServiceUnavailableError for the caller to degrade.

    :param str prompt_text: The prompt.
    :return: The generated text.
    """

    url = current_app.config[ 'AI_SERVICE_URL' ].format( model=current_app.config[ 'AI_SERVICE_MODEL' ] )
    payload = { 'contents': [ { 'parts': [ { 'text': prompt_text } ] } ] }

    try:
        response = requests.post(
            url,
            params={ 'key': current_app.config[ 'AI_SERVICE_API_KEY' ] },
            json=payload,
            timeout=current_app.config[ 'AI_SERVICE_TIMEOUT' ]
        )
    except requests.exceptions.RequestException as error:
        logging.error( 'AI service request failed: %s', error )
        raise AIServiceUnavailableError( 'request failed' ) from error

    if response.status_code != status.HTTP_200_OK:
        logging.error( 'AI service returned HTTP status code %s.', response.status_code )
        raise AIServiceUnavailableError( 'HTTP status code {}'.format( response.status_code ) )

    try:
        text = response.json()[ 'candidates' ][ 0 ][ 'content' ][ 'parts' ][ 0 ][ 'text' ]
    except ( ValueError, KeyError, IndexError, TypeError ) as error:
        logging.error( 'AI service returned a malformed response.' )
        raise AIServiceUnavailableError( 'malformed response' ) from error

    if not text or not text.strip():
        raise AIServiceUnavailableError( 'empty response' )
    return text
