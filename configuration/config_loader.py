"""The configuration loader for the application factory.

The YAML file has one section per environment: DEFAULT, DEV, TEST and PROD. Every environment starts from DEFAULT and
overrides what it names. Environment variables tagged with the environment name then override the file, e.g. for
PROD the variable PROD_JWT_SECRET_KEY sets JWT_SECRET_KEY. Their values are parsed as YAML scalars so that numbers and
booleans keep their types.
"""
import logging
import os

import yaml

DEFAULT_ENVIRONMENT = 'DEFAULT'


class ConfigLoader( dict ):
    """A dictionary of configuration values to update the Flask app.config() with."""

    def update_from_yaml_file( self, file_path, app_config_env ):
        """Load DEFAULT and then the named environment from the YAML file.

        :param str file_path: The path to the YAML file.
        :param str app_config_env: The environment name, e.g. TEST.
        :return:
        """

        with open( file_path, 'r' ) as file_pointer:
            configurations = yaml.safe_load( file_pointer ) or {}

        self.update( configurations.get( DEFAULT_ENVIRONMENT ) or {} )
        if app_config_env != DEFAULT_ENVIRONMENT:
            if app_config_env not in configurations:
                raise KeyError( 'The configuration {} does not exist in {}.'.format( app_config_env, file_path ) )
            self.update( configurations[ app_config_env ] or {} )

    def update_from_env_variables( self, app_config_env ):
        """Override values with environment variables tagged with the environment name.

        :param str app_config_env: The environment name, e.g. PROD.
        :return:
        """

        tag = '{}_'.format( app_config_env )
        for variable, value in os.environ.items():
            if not variable.startswith( tag ) or variable == tag:
                continue
            key = variable[ len( tag ): ]
            try:
                self[ key ] = yaml.safe_load( value ) if value != '' else ''
            except yaml.YAMLError:
                self[ key ] = value
            logging.debug( '***** Configuration %s set from the environment.', key )
