"""A module to facilitate serialization and deserialization of a model given its schema."""


def from_json( model_schema, model_dictionary, instance=None ):
    """Takes the model_dictionary and deserializes it into the model using its Marshmallow schema: model_schema.

    Only the keys that are columns on the model, and are not dump only on the schema, are passed to the schema. If an
    instance is provided it is updated in place ( a partial load ), otherwise a new model is built.

    :param obj model_schema: This is a Marshmallow schema to be used for 2-way serialization.
    :param dict model_dictionary: The dictionary that is to be deserialized by the schema.
    :param obj instance: An existing model to update.
    :return: The model.
    """

    fields = [ column.key for column in model_schema.Meta.model.__table__.columns ]
    dump_only = set( getattr( model_schema.Meta, 'dump_only', () ) )
    model_json = {}
    for field in fields:
        if field in model_dictionary and field != 'id' and field not in dump_only:
            model_json[ field ] = model_dictionary[ field ]

    if instance is not None:
        return model_schema.load( model_json, instance=instance, partial=True )
    return model_schema.load( model_json )
