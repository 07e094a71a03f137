"""Controllers for Flask-RESTful resources: handle the business logic for user profiles."""
import logging

from sqlalchemy.exc import IntegrityError

from food_rescue.exceptions.exception_model import ModelUserProfileExistsError
from food_rescue.exceptions.exception_model import ModelUserProfileNotFoundError
from food_rescue.exceptions.exception_model import ModelUserProfileRoleImmutableError
from food_rescue.flask_essentials import database
from food_rescue.helpers.clock import utcnow
from food_rescue.helpers.model_serialization import from_json
from food_rescue.models.user_profile import UserProfileModel
from food_rescue.schemas.user_profile import UserProfileSchema

EMAIL_TAKEN = 'A profile already exists with this email.'


def create_user_profile( user_id, payload ):
    """Create the profile for the identity in the token. The role chosen here can never change.

    payload = {
        "email": "pantry@example.org",
        "role": "charity",
        "organization_name": "Westside Pantry"
    }

    :param str user_id: The identity provider user ID.
    :param dict payload: The profile fields.
    :return: A dictionary of the profile.
    """

    if database.session.get( UserProfileModel, user_id ) is not None:
        raise ModelUserProfileExistsError()
    check_email_available( payload.get( 'email' ), user_id )

    profile = from_json( UserProfileSchema(), payload )
    profile.id = user_id
    profile.created_at = utcnow()
    database.session.add( profile )
    commit_profile( user_id )

    return UserProfileSchema().dump( profile )


def get_user_profile( user_id ):
    """The profile for the user ID."""

    profile = database.session.get( UserProfileModel, user_id )
    if profile is None:
        raise ModelUserProfileNotFoundError()
    return UserProfileSchema().dump( profile )


def update_user_profile( user_id, payload ):
    """Update the contact details on a profile.

    :param str user_id: The identity provider user ID.
    :param dict payload: The fields to update. A role different from the current one is refused.
    :return: A dictionary of the profile.
    """

    profile = database.session.get( UserProfileModel, user_id )
    if profile is None:
        raise ModelUserProfileNotFoundError()
    if 'role' in payload and payload[ 'role' ] != profile.role:
        raise ModelUserProfileRoleImmutableError()
    check_email_available( payload.get( 'email' ), user_id )

    from_json( UserProfileSchema(), payload, instance=profile )
    profile.last_updated = utcnow()
    commit_profile( user_id )

    return UserProfileSchema().dump( profile )


def check_email_available( email, user_id ):
    """Raise ModelUserProfileExistsError if another profile has the email."""

    if not email:
        return
    owner = UserProfileModel.query.filter_by( email=email ).first()
    if owner is not None and owner.id != user_id:
        raise ModelUserProfileExistsError( EMAIL_TAKEN )


def commit_profile( user_id ):
    """Commit the profile; a unique email taken by a concurrent request is reported as ModelUserProfileExistsError."""

    try:
        database.session.commit()
    except IntegrityError as error:
        database.session.rollback()
        logging.warning( 'Profile %s not saved: %s', user_id, error.orig )
        raise ModelUserProfileExistsError( EMAIL_TAKEN ) from error
