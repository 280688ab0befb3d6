"""
Logging Sanitizer Utility

Redacts credentials and payment account details from request payloads before
they are logged.
"""

from typing import Any, Dict, Mapping


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'password_confirm',
    'confirm_password',
    'current_password',
    'new_password',
    'secret',
    'secret_key',
    'token',
    'api_token',
    'api_key',
    'access_token',
    'authorization',
    'cookie',
    # vendor payment methods
    'details',
    'account_number',
}

REDACT_TEXT = '[REDACTED]'


def _sanitize_value(value: Any, redact_text: str) -> Any:
    if isinstance(value, Mapping):
        return sanitize_dict(value, redact_text)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(item, redact_text) for item in value]
    return value


def sanitize_dict(data: Mapping[str, Any], redact_text: str = REDACT_TEXT) -> Dict[str, Any]:
    """
    Sanitize a dictionary by replacing sensitive field values with redaction text.

    Nested dictionaries and lists of dictionaries (such as a vendor's
    payment methods) are sanitized too.

    Args:
        data: Dictionary to sanitize
        redact_text: Text to use for redacted values (default: '[REDACTED]')

    Returns:
        Sanitized copy with sensitive values replaced

    Example:
        >>> sanitize_dict({'username': 'admin', 'password': 'secret123'})
        {'username': 'admin', 'password': '[REDACTED]'}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_FIELDS:
            sanitized[key] = redact_text
        else:
            sanitized[key] = _sanitize_value(value, redact_text)
    return sanitized


def sanitize_headers(headers: Mapping[str, str], redact_text: str = REDACT_TEXT) -> Dict[str, str]:
    """Request headers safe for logging; Authorization and Cookie are redacted"""
    return sanitize_dict(dict(headers), redact_text)


def sanitize_exception_message(exception: Exception) -> str:
    """
    Exception text safe for logging.

    Messages that mention a sensitive field name are replaced wholesale.
    """
    message = str(exception)
    if any(field in message.lower() for field in SENSITIVE_FIELDS):
        return f"{type(exception).__name__}: [Message contains sensitive data]"
    return message
