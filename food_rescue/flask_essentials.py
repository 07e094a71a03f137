"""The Flask extensions shared by the models, the schemas and the application factory.

Both are bound to the application in create_app() with init_app(), and so the schemas load into the same
SQLAlchemy session that the donation store writes with.
"""
from flask_marshmallow import Marshmallow
from flask_sqlalchemy import SQLAlchemy

database = SQLAlchemy()  # pylint: disable=invalid-name
marshmallow = Marshmallow()  # pylint: disable=invalid-name
