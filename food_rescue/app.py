"""The main application module with create_app(), resources and error handlers."""
import logging
import os
from logging.config import dictConfig

from flask import Flask
from flask import jsonify
from flask_restful import Api
from marshmallow.exceptions import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import SQLAlchemyError

from configuration.config_loader import ConfigLoader
from food_rescue.exceptions.exception_lifecycle import AlreadyAssignedError
from food_rescue.exceptions.exception_lifecycle import InvalidTransitionError
from food_rescue.exceptions.exception_lifecycle import LifecycleUnknownActionError
from food_rescue.exceptions.exception_lifecycle import NotTransportEligibleError
from food_rescue.exceptions.exception_lifecycle import UnauthorizedError
from food_rescue.exceptions.exception_jwt import JWTRequestError
from food_rescue.exceptions.exception_model import ModelDonationNotFoundError
from food_rescue.exceptions.exception_model import ModelUserProfileExistsError
from food_rescue.exceptions.exception_model import ModelUserProfileNotFoundError
from food_rescue.exceptions.exception_model import ModelUserProfileRoleImmutableError
from food_rescue.exceptions.exception_store import StoreUnavailableError
from food_rescue.flask_essentials import database
from food_rescue.flask_essentials import marshmallow
from food_rescue.logging_configuration import get_logging_configuration
from food_rescue.resources.app_health import Heartbeat
from food_rescue.resources.donation import DonationBySearchableId
from food_rescue.resources.donation import Donations
from food_rescue.resources.donation import DonationTransition
from food_rescue.resources.insights import DonationInsights
from food_rescue.resources.stats import DonationStats
from food_rescue.resources.user_profile import UserProfileMe
from food_rescue.resources.user_profile import UserProfiles
from food_rescue.resources.utilities import Enumeration
# pylint: disable=too-many-locals
# pylint: disable=too-many-statements


def create_app( app_config_env=None ):
    """Application factory.

    Allows the application to be instantiated with a specific configuration, e.g. configurations for development,
    testing, and production. The configuration loader reads the YAML configuration and then any tagged environment
    variables, e.g. PROD_SQLALCHEMY_DATABASE_URI, into the Flask app.config(). Manages the application logging level.

    :param str app_config_env: The configuration name to use in loading the configuration variables.
    :return: The Flask application.
    """

    # Set the ENV variable in the Dockerfile. If we can't find a value set the app_config_env to DEFAULT.
    if not app_config_env:
        app_config_env = os.environ.get( 'APP_ENV', 'DEFAULT' )

    app = Flask( 'food_rescue_api' )

    conf_root = os.path.join( os.path.dirname( __file__ ), '..', 'configuration' )
    configuration = ConfigLoader()
    configuration.update_from_yaml_file( os.path.join( conf_root, 'conf.yml' ), app_config_env )
    configuration.update_from_env_variables( app_config_env )

    app.config.update( configuration )
    app.config.update( { 'ENV': app_config_env } )

    wsgi_log_level = 'WARNING'
    gunicorn_log_level = 'WARNING'
    # Set the level of the root logger.
    if app.config.get( 'WSGI_LOG_LEVEL' ):
        wsgi_log_level = app.config[ 'WSGI_LOG_LEVEL' ]
    if app.config.get( 'GUNICORN_LOG_LEVEL' ):
        gunicorn_log_level = app.config[ 'GUNICORN_LOG_LEVEL' ]

    # If running gunicorn add gunicorn.error to handlers.
    gunicorn = 'gunicorn' in os.environ.get( 'SERVER_SOFTWARE', '' )

    dictConfig( get_logging_configuration( wsgi_log_level, gunicorn_log_level, gunicorn ) )
    logging.root.log( logging.root.level, '***** Logging is enabled for this level.' )
    logging.root.log( logging.root.level, '***** app.config[ ENV ]: %s', app_config_env )

    database.init_app( app )
    marshmallow.init_app( app )

    # Errors raised in the resources are handled by the error handlers below rather than by Flask-RESTful.
    app.config.update( PROPAGATE_EXCEPTIONS=True )

    api = Api( app )

    api.add_resource( Donations, '/rescue/donations' )
    api.add_resource( DonationBySearchableId, '/rescue/donations/<string:searchable_id>' )
    api.add_resource( DonationTransition, '/rescue/donations/<string:searchable_id>/<string:action>' )
    api.add_resource( DonationStats, '/rescue/stats/<string:stats_type>' )
    api.add_resource( DonationInsights, '/rescue/insights/<string:insight_type>' )
    api.add_resource( UserProfiles, '/rescue/users' )
    api.add_resource( UserProfileMe, '/rescue/users/me' )
    api.add_resource( Enumeration, '/rescue/enumeration/<string:model>/<string:attribute>' )
    api.add_resource( Heartbeat, '/rescue/heartbeat' )

    @app.after_request
    def after_request( response ):  # pylint: disable=unused-variable
        """A handler for defining response headers.

        :param response: an HTTP response object
        :return:
        """

        response.headers.add( 'Access-Control-Allow-Origin', '*' )
        response.headers.add( 'Access-Control-Allow-Headers', 'Content-Type, Authorization' )
        response.headers.add( 'Access-Control-Allow-Methods', 'GET, PUT, POST' )
        return response

    @app.errorhandler( JWTRequestError )
    def handle_401( error ):  # pylint: disable=unused-variable
        """HTTP status 401 ( unauthorized ) error handler.

         :param error: Error message raised by exception.
         :return:
         """

        response = jsonify( handle_error_message( error ) )
        response.status_code = 401
        return response

    @app.errorhandler( UnauthorizedError )
    def handle_403( error ):  # pylint: disable=unused-variable
        """HTTP status 403 ( forbidden ) error handler.

         :param error: Error message raised by exception.
         :return:
         """

        response = jsonify( handle_error_message( error ) )
        response.status_code = 403
        return response

    @app.errorhandler( ModelDonationNotFoundError )
    @app.errorhandler( ModelUserProfileNotFoundError )
    @app.errorhandler( AttributeError )
    @app.errorhandler( KeyError )
    def handle_404( error ):  # pylint: disable=unused-variable
        """HTTP status 404 ( not found ) error handler.

        :param error: Error message raised by exception.
        :return:
        """

        response = jsonify( handle_error_message( error ) )
        response.status_code = 404
        return response

    @app.errorhandler( InvalidTransitionError )
    @app.errorhandler( AlreadyAssignedError )
    def handle_409( error ):  # pylint: disable=unused-variable
        """HTTP status 409 ( conflict ) error handler: the donation is not in a state that allows the action.

        :param error: Error message raised by exception.
        :return:
        """

        response = jsonify( handle_error_message( error ) )
        response.status_code = 409
        return response

    @app.errorhandler( NotTransportEligibleError )
    @app.errorhandler( LifecycleUnknownActionError )
    @app.errorhandler( ModelUserProfileExistsError )
    @app.errorhandler( ModelUserProfileRoleImmutableError )
    @app.errorhandler( MarshmallowValidationError )
    def handle_422( error ):  # pylint: disable=unused-variable
        """HTTP status 422 ( unprocessable entity ) error handler.

        :param error: Error message raised by exception.
        :return:
        """

        response = jsonify( handle_error_message( error ) )
        response.status_code = 422
        return response

    @app.errorhandler( SQLAlchemyError )
    @app.errorhandler( ValueError )
    def handle_500( error ):  # pylint: disable=unused-variable
        """HTTP status 500 ( internal server error ) error handler.

        :param error: Error message raised by exception.
        :return:
        """

        response = jsonify( handle_error_message( error ) )
        response.status_code = 500
        return response

    @app.errorhandler( StoreUnavailableError )
    def handle_503( error ):  # pylint: disable=unused-variable
        """HTTP status 503 ( service unavailable ) error handler: the transition was not written.

        :param error: Error message raised by exception.
        :return:
        """

        response = jsonify( handle_error_message( error ) )
        response.status_code = 503
        return response

    def handle_error_message( error ):
        """Used by error handlers for handling error and error.message.

        :param error: The error raised by the exception.
        :return: return the error message.
        """

        if hasattr( error, 'message' ):
            logging.exception( error.message )
            return error.message
        if hasattr( error, 'messages' ):
            # This is a Marshmallow validation error: a dictionary of field to messages.
            logging.exception( error.messages )
            return error.messages
        if hasattr( error, 'args' ):
            logging.exception( error.args )
            return error.args
        logging.exception( error )
        return str( error )

    return app


food_rescue_app = create_app()  # pylint: disable=invalid-name

if __name__ != '__main__':
    gunicorn_logger = logging.getLogger( 'gunicorn.error' )  # pylint: disable=invalid-name
    food_rescue_app.logger.handlers = gunicorn_logger.handlers
    food_rescue_app.logger.setLevel( gunicorn_logger.level )

if __name__ == '__main__':
    food_rescue_app.run( host="127.0.0.1", port=5000, debug=True )
