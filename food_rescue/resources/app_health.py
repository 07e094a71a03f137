"""Resources entry point to test the health of the application and its donation store."""
# pylint: disable=too-few-public-methods
# pylint: disable=no-self-use
from flask_api import status
from flask_restful import Resource

from food_rescue.controllers.app_health import heartbeat


class Heartbeat( Resource ):
    """Flask-RESTful resource endpoint for load balancer health checks. It needs no bearer token."""

    def get( self ):
        """503 when the donation store does not answer, so that lifecycle actions are not routed here."""

        if heartbeat():
            return { 'store': 'available' }, status.HTTP_200_OK

        return { 'store': 'unavailable' }, status.HTTP_503_SERVICE_UNAVAILABLE
