"""
Secret Configuration Repository backed by AWS Systems Manager Parameter Store.
Stores one SecureString JSON document per ODS instance.
"""
import json
from typing import Optional
import boto3
from botocore.exceptions import ClientError
from admin_app.core import config
from admin_app.core.exceptions import SecretStoreException
from admin_app.models.secret_configuration import OdsSecretConfiguration


class SecretConfigurationRepository:
    """Repository for per-instance secret configuration."""

    def __init__(self):
        self.ssm_client = boto3.client('ssm', region_name=config.settings.aws_region)
        self.prefix = config.settings.secret_parameter_prefix.rstrip('/')
        self.environment = config.settings.environment

    def get_secret_configuration(self, ods_instance_id: int) -> Optional[OdsSecretConfiguration]:
        """
        Fetch the secret configuration for an ODS instance.

        Args:
            ods_instance_id: ODS instance identifier

        Returns:
            OdsSecretConfiguration, or None if nothing is stored for the instance

        Raises:
            SecretStoreException: If the parameter cannot be read or parsed
        """
        try:
            response = self.ssm_client.get_parameter(
                Name=self._parameter_name(ods_instance_id),
                WithDecryption=True
            )
        except ClientError as e:
            if e.response['Error']['Code'] == 'ParameterNotFound':
                return None
            raise SecretStoreException(f"Failed to read secret configuration: {str(e)}") from e

        try:
            return OdsSecretConfiguration.from_dict(json.loads(response['Parameter']['Value']))
        except (ValueError, TypeError, AttributeError) as e:
            raise SecretStoreException(f"Stored secret configuration is not valid JSON: {str(e)}") from e

    def set_secret_configuration(self, ods_instance_id: int, configuration: OdsSecretConfiguration) -> None:
        """
        Store the secret configuration for an ODS instance, replacing any existing value.

        Args:
            ods_instance_id: ODS instance identifier
            configuration: Secret configuration to store

        Raises:
            SecretStoreException: If the parameter cannot be written
        """
        try:
            self.ssm_client.put_parameter(
                Name=self._parameter_name(ods_instance_id),
                Value=json.dumps(configuration.to_dict()),
                Type='SecureString',
                Overwrite=True
            )
        except ClientError as e:
            raise SecretStoreException(f"Failed to save secret configuration: {str(e)}") from e

    def _parameter_name(self, ods_instance_id: int) -> str:
        """Format: /<prefix>/<environment>/ods-instances/<id>/secret-configuration"""
        return f"{self.prefix}/{self.environment}/ods-instances/{ods_instance_id}/secret-configuration"
