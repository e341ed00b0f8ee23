"""
Resolves ODS API connection information for the current instance.
"""
from admin_app.core import config
from admin_app.models.connection_information import ApiMode, CloudOdsEnvironment, OdsApiConnectionInformation
from admin_app.models.instance_context import InstanceContext
from admin_app.repositories.secret_configuration_repository import SecretConfigurationRepository


class ApiConnectionInformationProvider:
    """Builds OdsApiConnectionInformation from settings and stored credentials."""

    def __init__(
        self,
        secret_configuration_repository: SecretConfigurationRepository = None,
        api_server_url: str = None,
        api_mode: ApiMode = None
    ):
        self.secret_configuration_repository = secret_configuration_repository or SecretConfigurationRepository()
        self.api_server_url = api_server_url or config.settings.ods_api_server_url
        self.api_mode = api_mode or ApiMode.parse(config.settings.api_mode)

    def get_connection_information_for_environment(
        self,
        environment: CloudOdsEnvironment,
        instance: InstanceContext
    ) -> OdsApiConnectionInformation:
        """
        Get connection information for an instance in an environment.

        Args:
            environment: Target environment
            instance: ODS instance the connection is for

        Returns:
            OdsApiConnectionInformation; client key and secret are empty
            when no bulk load credential is stored

        Raises:
            SecretStoreException: If stored credentials cannot be read
        """
        client_key = ""
        client_secret = ""
        secret_configuration = self.secret_configuration_repository.get_secret_configuration(instance.id)
        if secret_configuration and secret_configuration.bulk_upload_credential:
            client_key = secret_configuration.bulk_upload_credential.api_key
            client_secret = secret_configuration.bulk_upload_credential.api_secret

        return OdsApiConnectionInformation(
            instance_name=instance.name,
            api_mode=self.api_mode,
            api_server_url=self.api_server_url,
            client_key=client_key,
            client_secret=client_secret,
            instance_suffix=instance.numeric_suffix()
        )
