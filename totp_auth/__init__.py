"""基于时间的一次性密码（RFC 6238）服务端认证"""

from .auth import TOTPAuth, authorize, check_code
from .config import AuthenticatorConfig
from .errors import AuthenticatorError, ErrorKind
from .key import AuthenticatorKey
from .totp import calculate_code, format_code, get_remaining_seconds

__all__ = [
    'TOTPAuth',
    'AuthenticatorConfig',
    'AuthenticatorError',
    'AuthenticatorKey',
    'ErrorKind',
    'authorize',
    'calculate_code',
    'check_code',
    'format_code',
    'get_remaining_seconds',
]
