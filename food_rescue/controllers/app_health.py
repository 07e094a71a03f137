"""Controllers for Flask-RESTful resources: provide endpoint to test health of application."""
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from food_rescue.flask_essentials import database


def heartbeat():
    """Controller for simple heartbeat: the application is up and the database answers."""

    try:
        database.session.execute( text( 'SELECT 1' ) )
    except SQLAlchemyError:
        logging.exception( 'Heartbeat could not reach the database.' )
        database.session.rollback()
        return False
    return True
