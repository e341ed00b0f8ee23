"""
Learning Standards Service.
Stores Academic Benchmarks credentials and starts learning standards sync jobs.
"""
import logging
from admin_app.core import config
from admin_app.models.connection_information import ApiMode, CloudOdsEnvironment
from admin_app.models.dto.ods_instance_settings_dto import LearningStandardsSyncResponse
from admin_app.models.instance_context import InstanceContext
from admin_app.models.job_context import LearningStandardsJobContext
from admin_app.models.secret_configuration import LearningStandardsCredential, OdsSecretConfiguration
from admin_app.repositories.secret_configuration_repository import SecretConfigurationRepository
from admin_app.services.connection_information_service import ApiConnectionInformationProvider
from admin_app.services.job_runner import JobRunner

logger = logging.getLogger(__name__)


class AcademicBenchmarkConfig:
    """Academic Benchmarks connection settings for one sync."""

    def __init__(self, api_key: str, api_secret: str, ods_api_mode: ApiMode):
        self.api_key = api_key
        self.api_secret = api_secret
        self.ods_api_mode = ods_api_mode

    def __repr__(self):
        return f"AcademicBenchmarkConfig(ods_api_mode={self.ods_api_mode.value})"


class LearningStandardsSetupCommand:
    """Persists Academic Benchmarks credentials for an instance."""

    def __init__(self, secret_configuration_repository: SecretConfigurationRepository = None):
        self.secret_configuration_repository = secret_configuration_repository or SecretConfigurationRepository()

    def execute(self, instance: InstanceContext, ab_config: AcademicBenchmarkConfig) -> None:
        secret_configuration = (
            self.secret_configuration_repository.get_secret_configuration(instance.id)
            or OdsSecretConfiguration()
        )
        secret_configuration.learning_standards_credential = LearningStandardsCredential(
            api_key=ab_config.api_key,
            api_secret=ab_config.api_secret,
            ods_api_mode=ab_config.ods_api_mode.value
        )
        self.secret_configuration_repository.set_secret_configuration(instance.id, secret_configuration)


class LearningStandardsService:
    """Service for learning standards synchronization."""

    def __init__(
        self,
        setup_command: LearningStandardsSetupCommand = None,
        connection_information_provider: ApiConnectionInformationProvider = None,
        job_runner: JobRunner = None,
        api_mode: ApiMode = None
    ):
        self.setup_command = setup_command or LearningStandardsSetupCommand()
        self.connection_information_provider = connection_information_provider or ApiConnectionInformationProvider()
        self.job_runner = job_runner or JobRunner()
        self.api_mode = api_mode or ApiMode.parse(config.settings.api_mode)

    def sync(self, instance: InstanceContext, api_key: str, api_secret: str) -> LearningStandardsSyncResponse:
        """
        Store credentials and start a learning standards sync.

        Args:
            instance: Current ODS instance
            api_key: Academic Benchmarks API key
            api_secret: Academic Benchmarks API secret

        Returns:
            LearningStandardsSyncResponse; enqueued is False when a sync is already running

        Raises:
            SecretStoreException: If credentials cannot be stored
            JobQueueException: If the job cannot be queued
        """
        self.setup_command.execute(
            instance,
            AcademicBenchmarkConfig(api_key=api_key, api_secret=api_secret, ods_api_mode=self.api_mode)
        )

        environment = CloudOdsEnvironment(config.settings.cloud_ods_environment)
        connection_information = self.connection_information_provider.get_connection_information_for_environment(
            environment, instance
        )

        job_context = LearningStandardsJobContext(
            environment=environment.value,
            api_url=connection_information.api_server_url,
            ods_instance_id=instance.id,
            school_year=instance.numeric_suffix() if self.api_mode == ApiMode.YEAR_SPECIFIC else None
        )

        job_id = self.job_runner.enqueue_job(job_context)
        if job_id is None:
            logger.info("Learning standards sync already running; request for instance %s skipped", instance.id)

        return LearningStandardsSyncResponse(
            enqueued=job_id is not None,
            is_job_running=job_id is None,
            job_id=job_id
        )
