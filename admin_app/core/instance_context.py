"""
FastAPI dependency resolving the ODS instance a request targets.
"""
from fastapi import Header, HTTPException, status
from typing import Optional
from admin_app.core import config
from admin_app.models.instance_context import InstanceContext


def get_instance_context(
    x_ods_instance_id: Optional[str] = Header(None),
    x_ods_instance_name: Optional[str] = Header(None)
) -> InstanceContext:
    """
    Resolve the current ODS instance from request headers.

    Args:
        x_ods_instance_id: X-Ods-Instance-Id header value
        x_ods_instance_name: X-Ods-Instance-Name header value

    Returns:
        InstanceContext for the request

    Raises:
        HTTPException: If the instance id header is not a number
    """
    if x_ods_instance_id is None:
        return InstanceContext(
            id=config.settings.default_ods_instance_id,
            name=x_ods_instance_name or config.settings.default_ods_instance_name
        )

    try:
        instance_id = int(x_ods_instance_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Ods-Instance-Id header must be a number"
        )

    return InstanceContext(
        id=instance_id,
        name=x_ods_instance_name or f"Ed_Fi_Ods_{instance_id}"
    )
