# app/core/audit.py
"""
Centralized audit logging.
Destructive actions (DELETE of pagos/usuarios) are written to a dedicated
logger as one JSON object per line (logs/audit.log).
"""
import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request

from app.core.config import get_settings
from app.models.usuario import Usuario

# Configure dedicated audit logger
audit_logger = logging.getLogger("audit")
audit_logger.setLevel(logging.INFO)
audit_logger.propagate = False  # Don't duplicate to root logger


def _ensure_handler() -> None:
    if audit_logger.handlers:
        return
    log_dir = get_settings().log_dir
    os.makedirs(log_dir, exist_ok=True)
    file_handler = logging.FileHandler(os.path.join(log_dir, "audit.log"), encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    audit_logger.addHandler(file_handler)


def client_ip(request: Optional[Request]) -> str:
    if request is None:
        return "unknown"
    # Check for forwarded headers (reverse proxy)
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def log_action(
    action: str,
    resource_type: str,
    resource_id: str,
    user: Optional[Usuario] = None,
    request: Optional[Request] = None,
    details: Optional[dict] = None,
    status: str = "success",
) -> dict:
    """
    Log a security-relevant action to the audit log.

    Args:
        action: The action performed (e.g., "DELETE", "UPDATE", "CREATE")
        resource_type: Type of resource affected (e.g., "pago", "usuario")
        resource_id: Identifier of the affected resource
        user: The Usuario who performed the action (optional)
        request: FastAPI Request object to extract IP (optional)
        details: Additional context dictionary (optional)
        status: "success" or "failure"

    Returns:
        The logged entry.
    """
    _ensure_handler()

    log_entry = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "action": action.upper(),
        "resource_type": resource_type,
        "resource_id": str(resource_id),
        "user": user.email if user else "anonymous",
        "superuser": bool(user and user.is_superuser),
        "ip_address": client_ip(request),
        "status": status,
    }

    if details:
        log_entry["details"] = details

    audit_logger.info(json.dumps(log_entry, ensure_ascii=False))
    return log_entry
