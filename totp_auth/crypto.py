import base64
import binascii
import logging
import os
import secrets
import threading
from typing import Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac

from .errors import AuthenticatorError

logger = logging.getLogger(__name__)

# SHA1 摘要长度
DIGEST_SIZE = 20


def hmac_sha1(key: bytes, message: bytes) -> bytes:
    """
    计算 HMAC-SHA1

    底层密码库的异常只记录到日志，对调用方统一抛出 CRYPTO_UNAVAILABLE。

    Args:
        key: 密钥字节
        message: 消息字节

    Returns:
        bytes: 20字节摘要
    """
    try:
        if not key:
            raise ValueError("HMAC密钥不能为空")
        h = hmac.HMAC(key, hashes.SHA1())
        h.update(message)
        return h.finalize()
    except (UnsupportedAlgorithm, TypeError, ValueError) as e:
        logger.error(f"HMAC-SHA1 计算失败: {e}", exc_info=True)
        raise AuthenticatorError.crypto_unavailable() from None


def encode_secret(key: bytes) -> str:
    """将密钥字节编码为 Base32 字符串"""
    return base64.b32encode(key).decode('ascii')


def decode_secret(secret: str) -> bytes:
    """
    将 Base32 字符串解码为密钥字节

    与认证器应用显示的格式兼容：忽略空格、大小写，允许省略填充字符。

    Args:
        secret: Base32 编码的密钥

    Returns:
        bytes: 密钥字节
    """
    cleaned = secret.replace(' ', '').replace('-', '').upper().rstrip('=')
    missing_padding = len(cleaned) % 8
    if missing_padding:
        cleaned += '=' * (8 - missing_padding)
    try:
        return base64.b32decode(cleaned)
    except (binascii.Error, ValueError) as e:
        logger.error(f"Base32 密钥解码失败: {e}", exc_info=True)
        raise AuthenticatorError.crypto_unavailable() from None


class SecureRandomSource:
    """基于操作系统 CSPRNG 的随机源，可在多线程间共享"""

    def __init__(self, seed_device: Optional[str] = '/dev/urandom'):
        self.seed_device = seed_device

    def fill(self, size: int) -> bytes:
        """返回 size 个不可预测的随机字节"""
        return secrets.token_bytes(size)

    def reseed(self, seed: bytes) -> None:
        """
        向内核熵池混入种子

        写入 /dev/urandom 的数据会被混入熵池，但不增加熵计数。
        平台不支持时只记录日志。
        """
        if not self.seed_device or not os.path.exists(self.seed_device):
            logger.debug("当前平台不支持向随机源写入种子")
            return
        try:
            with open(self.seed_device, 'wb') as f:
                f.write(seed)
        except OSError as e:
            logger.warning(f"随机源重新播种失败: {e}")


class LockedRandomSource:
    """为非线程安全的随机源加锁"""

    def __init__(self, source):
        self.source = source
        self._lock = threading.Lock()

    def fill(self, size: int) -> bytes:
        with self._lock:
            return self.source.fill(size)

    def reseed(self, seed: bytes) -> None:
        with self._lock:
            self.source.reseed(seed)
