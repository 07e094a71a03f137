"""Controllers for Flask-RESTful resources: handle the business logic for the endpoint."""
from food_rescue.models.donation import DonationModel
from food_rescue.models.user_profile import UserProfileModel

MODELS_WITH_ENUMERATIONS = {
    'donationmodel': DonationModel,
    'userprofilemodel': UserProfileModel
}


def get_enumeration( model, attribute ):
    """Simple query to return the enumeration values for a model and its attribute, e.g. the donation categories.

    :param model: The model to find enumeration values on.
    :param attribute: The enumeration attribute on the model.
    :return: An enumeration list.
    """

    try:
        enumeration_list = getattr( MODELS_WITH_ENUMERATIONS[ model ], attribute ).property.columns[ 0 ].type.enums
        return enumeration_list
    except AttributeError as error:
        error.args = ( 'The enumeration for the attribute requested does not exist.', )
        raise error
    except KeyError as error:
        error.args = ( 'KeyError: Model key does not exist.', )
        raise error
