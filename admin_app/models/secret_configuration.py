"""
Per-instance secret configuration.
Holds credential material the admin app needs to drive background jobs.
"""
from typing import Optional


class BulkUploadCredential:
    """API client credential used by the bulk load job."""

    def __init__(self, api_key: str = "", api_secret: str = ""):
        self.api_key = api_key
        self.api_secret = api_secret

    def to_dict(self) -> dict:
        return {"api_key": self.api_key, "api_secret": self.api_secret}

    @classmethod
    def from_dict(cls, data: dict) -> "BulkUploadCredential":
        return cls(api_key=data.get("api_key", ""), api_secret=data.get("api_secret", ""))


class LearningStandardsCredential:
    """Academic Benchmarks credential used by the learning standards sync."""

    def __init__(self, api_key: str = "", api_secret: str = "", ods_api_mode: Optional[str] = None):
        self.api_key = api_key
        self.api_secret = api_secret
        self.ods_api_mode = ods_api_mode

    def to_dict(self) -> dict:
        return {"api_key": self.api_key, "api_secret": self.api_secret, "ods_api_mode": self.ods_api_mode}

    @classmethod
    def from_dict(cls, data: dict) -> "LearningStandardsCredential":
        return cls(
            api_key=data.get("api_key", ""),
            api_secret=data.get("api_secret", ""),
            ods_api_mode=data.get("ods_api_mode")
        )


class OdsSecretConfiguration:
    """Secret bundle stored for one ODS instance. Either credential may be absent."""

    def __init__(
        self,
        bulk_upload_credential: Optional[BulkUploadCredential] = None,
        learning_standards_credential: Optional[LearningStandardsCredential] = None
    ):
        self.bulk_upload_credential = bulk_upload_credential
        self.learning_standards_credential = learning_standards_credential

    def to_dict(self) -> dict:
        return {
            "bulk_upload_credential": self.bulk_upload_credential.to_dict() if self.bulk_upload_credential else None,
            "learning_standards_credential": (
                self.learning_standards_credential.to_dict() if self.learning_standards_credential else None
            )
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OdsSecretConfiguration":
        bulk = data.get("bulk_upload_credential")
        learning_standards = data.get("learning_standards_credential")
        return cls(
            bulk_upload_credential=BulkUploadCredential.from_dict(bulk) if bulk else None,
            learning_standards_credential=(
                LearningStandardsCredential.from_dict(learning_standards) if learning_standards else None
            )
        )

    def __repr__(self):
        return (
            f"OdsSecretConfiguration(bulk_upload_credential={'set' if self.bulk_upload_credential else None}, "
            f"learning_standards_credential={'set' if self.learning_standards_credential else None})"
        )
