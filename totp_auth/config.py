"""认证器配置"""

import os
import logging
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .errors import AuthenticatorError

logger = logging.getLogger(__name__)

# 密钥的二进制位数，10字节经Base32编码后正好16个字符
SECRET_BITS = 80

# 生成密钥时附带的备用码数量，与Google默认值一致
SCRATCH_CODES = 5

# 每个备用码占用的随机字节数
BYTES_PER_SCRATCH_CODE = 4

# 备用码取模，得到8位数字
SCRATCH_CODE_MODULE = 100_000_000

# 重新播种随机源时使用的种子长度（字节）
SEED_SIZE = 128

# 验证窗口的上下限
MIN_WINDOW = 1
MAX_WINDOW = 17

# 默认验证窗口，与Google Authenticator一致
DEFAULT_WINDOW_SIZE = 3

# HMAC使用的哈希函数，RFC 6238 客户端只支持SHA1
HMAC_HASH_FUNCTION = 'SHA1'

# 验证码取模，得到6位数字
SECRET_KEY_MODULE = 1000 * 1000

# 每个时间步长（毫秒）
KEY_VALIDATION_INTERVAL_MS = 30 * 1000


def _read_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"环境变量 {name} 不是整数: {value!r}")
        raise AuthenticatorError.invalid_argument(f"{name} 必须是整数: {value!r}")


def validate_window(window: int) -> int:
    """
    检查验证窗口是否在合法范围内

    Args:
        window: 窗口大小

    Returns:
        int: 通过检查的窗口大小
    """
    if isinstance(window, bool) or not isinstance(window, int):
        raise AuthenticatorError.invalid_argument(f"窗口大小必须是整数: {window!r}")
    if window < MIN_WINDOW or window > MAX_WINDOW:
        raise AuthenticatorError.invalid_argument(
            f"无效的窗口大小: {window}，必须在 {MIN_WINDOW} 到 {MAX_WINDOW} 之间"
        )
    return window


class AuthenticatorConfig:
    """认证器的可调默认值"""

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE,
                 scratch_codes: int = SCRATCH_CODES):
        self.window_size = validate_window(window_size)
        if scratch_codes < 0:
            raise AuthenticatorError.invalid_argument(
                f"备用码数量不能为负数: {scratch_codes}"
            )
        self.scratch_codes = scratch_codes

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> 'AuthenticatorConfig':
        """
        从环境变量（以及 .env 文件）读取配置

        Args:
            dotenv_path: .env 文件路径，为None时从当前工作目录向上查找

        Returns:
            AuthenticatorConfig: 配置实例
        """
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))

        window_size = _read_int('TOTP_WINDOW_SIZE', DEFAULT_WINDOW_SIZE)
        scratch_codes = _read_int('TOTP_SCRATCH_CODES', SCRATCH_CODES)
        try:
            return cls(window_size=window_size, scratch_codes=scratch_codes)
        except AuthenticatorError as e:
            logger.warning(f"TOTP配置无效: {e.message}")
            raise

    def __repr__(self):
        return (f"AuthenticatorConfig(window_size={self.window_size}, "
                f"scratch_codes={self.scratch_codes})")
