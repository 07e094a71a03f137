"""The record store for donations.

Every status bearing write goes through conditional_update(), which is a single compare-and-set UPDATE: the row is
only written if the expected fields still hold at write time. There are no unconditioned overwrites of the lifecycle
fields anywhere in the application.
"""
import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError

from food_rescue.exceptions.exception_model import ModelDonationNotFoundError
from food_rescue.exceptions.exception_store import StoreUnavailableError
from food_rescue.flask_essentials import database
from food_rescue.models.donation import DonationModel


class DonationStore:
    """Query, create and conditionally update donations on a SQLAlchemy session."""

    def __init__( self, session=None ):
        self.session = session or database.session

    def get( self, searchable_id ):
        """Return the donation with the given searchable ID.

        :param searchable_id: A UUID, or its string representation.
        :return: DonationModel
        """

        try:
            if not isinstance( searchable_id, uuid.UUID ):
                searchable_id = uuid.UUID( str( searchable_id ) )
        except ValueError:
            raise ModelDonationNotFoundError()

        try:
            donation = self.session.query( DonationModel ).filter_by( searchable_id=searchable_id ).one_or_none()
        except SQLAlchemyError as error:
            self.session.rollback()
            logging.exception( 'Donation store get failed for %s.', searchable_id )
            raise StoreUnavailableError( 'get' ) from error

        if not donation:
            raise ModelDonationNotFoundError()
        return donation

    def query( self, filters=None, order=None, limit=None ):
        """Return the donations that match all filters.

        :param list filters: SQLAlchemy boolean expressions on DonationModel.
        :param list order: SQLAlchemy order by clauses.
        :param int limit: The maximum number of donations to return.
        :return: A list of DonationModel.
        """

        query = self.session.query( DonationModel )
        if filters:
            query = query.filter( *filters )
        if order:
            query = query.order_by( *order )
        if limit:
            query = query.limit( limit )

        try:
            return query.all()
        except SQLAlchemyError as error:
            self.session.rollback()
            logging.exception( 'Donation store query failed.' )
            raise StoreUnavailableError( 'query' ) from error

    def create( self, donation ):
        """Persist a new donation and return its searchable ID."""

        try:
            self.session.add( donation )
            self.session.commit()
        except SQLAlchemyError as error:
            self.session.rollback()
            logging.exception( 'Donation store create failed.' )
            raise StoreUnavailableError( 'create' ) from error
        return donation.searchable_id

    def conditional_update( self, donation_id, expected_fields, new_fields ):
        """Compare-and-set: write new_fields on the donation only if every expected field still has its value.

        An expected value of None matches a NULL column.

        :param int donation_id: The primary key of the donation.
        :param dict expected_fields: Column name to the value it must have at write time.
        :param dict new_fields: Column name to the value to write.
        :return: True if the row was written, False if the precondition failed.
        """

        criteria = [ DonationModel.id == donation_id ]
        for field, value in expected_fields.items():
            column = getattr( DonationModel, field )
            if value is None:
                criteria.append( column.is_( None ) )
            else:
                criteria.append( column == value )

        try:
            row_count = self.session.query( DonationModel ).filter( *criteria ).update(
                new_fields, synchronize_session=False
            )
            self.session.commit()
        except SQLAlchemyError as error:
            self.session.rollback()
            logging.exception( 'Donation store conditional update failed for donation %s.', donation_id )
            raise StoreUnavailableError( 'conditional_update' ) from error

        if row_count != 1:
            logging.debug( 'Conditional update precondition failed for donation %s: %s', donation_id, expected_fields )
            return False
        return True
