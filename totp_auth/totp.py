import time
from typing import Optional

from .config import KEY_VALIDATION_INTERVAL_MS, SECRET_KEY_MODULE
from .crypto import hmac_sha1
from .errors import AuthenticatorError

# 有符号64位计数器的取值范围
MIN_COUNTER = -(1 << 63)
MAX_COUNTER = (1 << 63) - 1


def current_millis() -> int:
    """当前UNIX时间（毫秒）"""
    return int(time.time() * 1000)


def validate_millis(millis: int) -> int:
    """检查UNIX时间（毫秒）是否为整数"""
    if isinstance(millis, bool) or not isinstance(millis, int):
        raise AuthenticatorError.invalid_argument(f"时间必须是整数毫秒: {millis!r}")
    return millis


def time_step(millis: int) -> int:
    """将UNIX时间（毫秒）换算为30秒的时间步长"""
    return validate_millis(millis) // KEY_VALIDATION_INTERVAL_MS


def counter_to_bytes(counter: int) -> bytes:
    """
    将计数器转换为8字节大端序

    负数按补码表示，验证窗口越过时间步长0时会出现负计数器。
    """
    if counter < MIN_COUNTER or counter > MAX_COUNTER:
        raise AuthenticatorError.invalid_argument(f"计数器超出64位范围: {counter}")
    return counter.to_bytes(8, 'big', signed=True)


def calculate_code(key: bytes, counter: int) -> int:
    """
    按 RFC 4226 计算指定计数器的验证码

    Args:
        key: 二进制格式的密钥
        counter: 计数器（TOTP中为时间步长）

    Returns:
        int: 验证码，范围 [0, 1000000)
    """
    digest = hmac_sha1(key, counter_to_bytes(counter))

    # 动态截断：摘要最后一个字节的低4位决定偏移量
    offset = digest[-1] & 0x0F
    truncated = int.from_bytes(digest[offset:offset + 4], 'big')

    # 清除最高位，再对最大验证码取模
    truncated &= 0x7FFFFFFF
    return truncated % SECRET_KEY_MODULE


def get_remaining_seconds(now_millis: Optional[int] = None) -> int:
    """
    获取当前验证码的剩余有效时间

    Args:
        now_millis: UNIX时间（毫秒），为None时使用当前时间

    Returns:
        int: 剩余秒数，范围 [1, 30]
    """
    if now_millis is None:
        now_millis = current_millis()
    interval = KEY_VALIDATION_INTERVAL_MS // 1000
    return interval - (validate_millis(now_millis) // 1000) % interval


def format_code(code: int) -> str:
    """将验证码补齐为6位数字字符串"""
    if code < 0 or code >= SECRET_KEY_MODULE:
        raise AuthenticatorError.invalid_argument(f"验证码超出范围: {code}")
    return str(code).zfill(6)
