# src/beeper_desktop/utils/sanitizer.py
"""
Маскирование чувствительных данных перед логированием.

Bearer токен Beeper Desktop передаётся в каждом запросе, поэтому всё,
что уходит в логи (поля, заголовки, URL), проходит через этот модуль.
"""

import re
from typing import Any, Dict

REDACTED = "***REDACTED***"

# Имена полей, значения которых скрываются целиком (case-insensitive,
# совпадение по подстроке)
SENSITIVE_KEYS = frozenset({
    'password', 'passwd', 'secret',
    'token', 'access_token', 'refresh_token', 'bearer',
    'authorization', 'api_key', 'apikey', 'cookie',
})

SENSITIVE_PATTERNS = [
    # Bearer токены в строках
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1' + REDACTED),
    # token=value, access_token: value
    (re.compile(r'((?:access_)?token[\s:=]+)([^\s&,;]+)', re.IGNORECASE), r'\1' + REDACTED),
]

_SENSITIVE_QUERY = re.compile(
    r'([?&](?:access_token|token|api_key|password)=)([^&\s]+)',
    re.IGNORECASE,
)


def _is_sensitive_key(key: str) -> bool:
    key = key.lower()
    return any(sensitive in key for sensitive in SENSITIVE_KEYS)


def mask_sensitive_data(data: Any, mask: str = REDACTED) -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Args:
        data: Данные для маскирования
        mask: Строка-заменитель

    Returns:
        Копия данных с замаскированными значениями

    Examples:
        >>> mask_sensitive_data({"Authorization": "Bearer abc", "method": "GET"})
        {'Authorization': '***REDACTED***', 'method': 'GET'}
        >>> mask_sensitive_data("header Bearer abc123")
        'header Bearer ***REDACTED***'
    """
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        result = data
        for pattern, replacement in SENSITIVE_PATTERNS:
            result = pattern.sub(replacement.replace(REDACTED, mask), result)
        return result

    if isinstance(data, dict):
        return {
            key: mask if _is_sensitive_key(str(key)) else mask_sensitive_data(value, mask)
            for key, value in data.items()
        }

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    return data


def mask_headers(headers: Dict[str, str], mask: str = REDACTED) -> Dict[str, str]:
    """
    Маскирует чувствительные HTTP заголовки.

    Examples:
        >>> mask_headers({"Authorization": "Bearer tok", "Accept": "application/json"})
        {'Authorization': '***REDACTED***', 'Accept': 'application/json'}
    """
    return {key: mask if _is_sensitive_key(key) else value for key, value in headers.items()}


def mask_url(url: str, mask: str = REDACTED) -> str:
    """
    Маскирует пароль в userinfo и токены в query параметрах URL.

    Examples:
        >>> mask_url("http://localhost:23373/v0/search?access_token=abc&query=hi")
        'http://localhost:23373/v0/search?access_token=***REDACTED***&query=hi'
    """
    url = re.sub(r'://([^:/@]+):([^@]+)@', rf'://\1:{mask}@', url)
    return _SENSITIVE_QUERY.sub(rf'\1{mask}', url)
