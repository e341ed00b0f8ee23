"""
ODS API version inference and the bulk load throttle that depends on it.
"""
import logging
import os
import re
import time
from typing import Dict, Optional, Tuple
import requests
from admin_app.core import config
from admin_app.core.exceptions import OdsApiVersionException

logger = logging.getLogger(__name__)

ED_FI_DATA_MODEL = "Ed-Fi"
LEGACY_MAJOR_VERSION = 3

_MAJOR_VERSION = re.compile(r"^\s*v?(\d+)")


class InferOdsApiVersion:
    """
    Reads the ODS API root document to learn its versions.
    Documents are cached per URL for cache_seconds so an upgraded ODS API is picked up.
    """

    def __init__(
        self,
        timeout_seconds: float = None,
        session: requests.Session = None,
        cache_seconds: float = None
    ):
        self.timeout_seconds = timeout_seconds or config.settings.ods_api_timeout_seconds
        self.session = session or requests.Session()
        self.cache_seconds = cache_seconds if cache_seconds is not None else config.settings.ods_api_version_cache_seconds
        self._cache: Dict[str, Tuple[float, dict]] = {}

    def version(self, api_url: str) -> str:
        """
        Get the ODS API product version.

        Args:
            api_url: ODS API server URL

        Returns:
            Version string, e.g. "5.0.0"

        Raises:
            OdsApiVersionException: If the version cannot be determined
        """
        document = self._root_document(api_url)
        version = document.get('version')
        if not version:
            raise OdsApiVersionException(f"ODS API at {api_url} did not report a version")
        return str(version)

    def ed_fi_standard_version(self, api_url: str) -> str:
        """
        Get the Ed-Fi data standard version implemented by the ODS API.

        Args:
            api_url: ODS API server URL

        Returns:
            Data standard version string, e.g. "3.2.0-c"

        Raises:
            OdsApiVersionException: If no Ed-Fi data model is reported
        """
        document = self._root_document(api_url)
        for data_model in document.get('dataModels') or []:
            if data_model.get('name') == ED_FI_DATA_MODEL and data_model.get('version'):
                return str(data_model['version'])
        raise OdsApiVersionException(f"ODS API at {api_url} did not report an Ed-Fi data standard version")

    def _root_document(self, api_url: str) -> dict:
        url = api_url.rstrip('/')
        cached = self._cache.get(url)
        if cached and time.monotonic() - cached[0] < self.cache_seconds:
            return cached[1]

        try:
            response = self.session.get(url, timeout=self.timeout_seconds, headers={'Accept': 'application/json'})
            response.raise_for_status()
            document = response.json()
        except requests.RequestException as e:
            raise OdsApiVersionException(f"Failed to reach ODS API at {url}: {str(e)}") from e
        except ValueError as e:
            raise OdsApiVersionException(f"ODS API at {url} returned an invalid version document") from e

        if not isinstance(document, dict):
            raise OdsApiVersionException(f"ODS API at {url} returned an invalid version document")

        logger.info("ODS API at %s reports version %s", url, document.get('version'))
        self._cache[url] = (time.monotonic(), document)
        return document


def major_version(api_version: str) -> Optional[int]:
    """Leading numeric component of a version string, or None."""
    match = _MAJOR_VERSION.match(api_version or "")
    return int(match.group(1)) if match else None


def select_max_simultaneous_requests(api_version: str) -> int:
    """
    Pick the bulk load concurrency for an ODS API version.
    The 3.x API and anything unrecognized is loaded serially.
    """
    major = major_version(api_version)
    if major is None or major <= LEGACY_MAJOR_VERSION:
        return config.settings.legacy_bulk_upload_max_simultaneous_requests
    return config.settings.bulk_upload_max_simultaneous_requests


def schema_path_for(data_standard_version: str, schema_base_path: str = None) -> str:
    """XSD folder for a data standard version."""
    return os.path.join(schema_base_path or config.settings.xsd_folder, data_standard_version)
