import logging
from typing import Callable, Optional

from . import totp
from .config import (
    AuthenticatorConfig,
    BYTES_PER_SCRATCH_CODE,
    SECRET_BITS,
    SECRET_KEY_MODULE,
    SEED_SIZE,
    validate_window,
)
from .crypto import LockedRandomSource, SecureRandomSource, decode_secret, encode_secret
from .errors import AuthenticatorError
from .key import AuthenticatorKey, generate_scratch_codes


def _require_secret(secret: Optional[str]) -> str:
    if secret is None or secret == '':
        raise AuthenticatorError.invalid_argument("密钥不能为空")
    if not isinstance(secret, str):
        raise AuthenticatorError.invalid_argument(f"密钥必须是Base32字符串: {type(secret).__name__}")
    return secret


def check_code(key: bytes, code: int, now_millis: int, window: int) -> bool:
    """
    在时间窗口内检查验证码

    窗口为偶数时向未来多检查一个时间步长。

    Args:
        key: 二进制格式的密钥
        code: 待检查的验证码
        now_millis: UNIX时间（毫秒）
        window: 窗口大小

    Returns:
        bool: 任一时间步长的验证码与之相同时返回True
    """
    step = totp.time_step(now_millis)
    for i in range(-((window - 1) // 2), window // 2 + 1):
        if totp.calculate_code(key, step + i) == code:
            return True
    return False


def authorize(secret: str, verification_code: int, window: int, now_millis: int) -> bool:
    """
    验证客户端提交的验证码

    Args:
        secret: Base32编码的密钥
        verification_code: 验证码
        window: 窗口大小，范围 [1, 17]
        now_millis: UNIX时间（毫秒）

    Returns:
        bool: 验证是否成功
    """
    _require_secret(secret)

    if isinstance(verification_code, bool) or not isinstance(verification_code, int):
        raise AuthenticatorError.invalid_argument(f"验证码必须是整数: {verification_code!r}")

    # 超出范围的验证码只是错误答案，不是非法请求
    if verification_code <= 0 or verification_code >= SECRET_KEY_MODULE:
        return False

    validate_window(window)
    totp.validate_millis(now_millis)

    key = decode_secret(secret)
    return check_code(key, verification_code, now_millis, window)


class TOTPAuth:
    """
    RFC 6238 服务端认证器

    生成的密钥以及验证时传入的密钥都不会被保存。
    """

    def __init__(self, config: Optional[AuthenticatorConfig] = None,
                 random_source=None,
                 clock: Optional[Callable[[], int]] = None):
        """
        Args:
            config: 配置，为None时从环境变量读取
            random_source: 随机源，需提供 fill(size) 和 reseed(seed)；
                自定义随机源会被加锁包装
            clock: 返回UNIX时间（毫秒）的函数
        """
        self.logger = logging.getLogger(__name__)
        self.config = config if config is not None else AuthenticatorConfig.from_env()
        self._window_size = self.config.window_size

        if random_source is None:
            self.random = SecureRandomSource()
        else:
            self.random = LockedRandomSource(random_source)

        self.clock = clock or totp.current_millis

    def reseed(self) -> None:
        """用随机源自身产生的种子重新播种"""
        self.random.reseed(self.random.fill(SEED_SIZE))
        self.logger.debug("随机源已重新播种")

    def generate_secret_key(self) -> AuthenticatorKey:
        """
        生成新的密钥

        服务端需要自行保存密钥并与用户账户关联，用户需要在客户端登记该密钥。

        Returns:
            AuthenticatorKey: Base32密钥、时间步长0的验证码以及备用码
        """
        secret_size = SECRET_BITS // 8
        scratch_count = self.config.scratch_codes
        buffer = self.random.fill(secret_size + scratch_count * BYTES_PER_SCRATCH_CODE)

        secret_key = buffer[:secret_size]
        generated_key = encode_secret(secret_key)

        # 时间步长0的验证码，出错时异常已在底层记录日志
        verification_code = totp.calculate_code(secret_key, 0)

        scratch_codes = generate_scratch_codes(buffer[secret_size:], scratch_count, self.random)

        self.logger.debug(f"已生成新的TOTP密钥，备用码 {len(scratch_codes)} 个")
        return AuthenticatorKey(generated_key, verification_code, scratch_codes)

    def get_window_size(self) -> int:
        return self._window_size

    def set_window_size(self, window: int) -> None:
        """
        设置默认验证窗口

        Args:
            window: 窗口大小，范围 [1, 17]，超出范围时抛出异常且不修改当前值
        """
        self._window_size = validate_window(window)

    window_size = property(get_window_size, set_window_size)

    def authorize(self, secret: str, verification_code: int,
                  window: Optional[int] = None,
                  now_millis: Optional[int] = None) -> bool:
        """
        验证客户端提交的验证码

        Args:
            secret: Base32编码的密钥
            verification_code: 验证码
            window: 窗口大小，为None时使用实例的默认窗口
            now_millis: UNIX时间（毫秒），为None时使用时钟

        Returns:
            bool: 验证是否成功
        """
        if window is None:
            window = self.get_window_size()
        if now_millis is None:
            now_millis = self.clock()
        return authorize(secret, verification_code, window, now_millis)

    def get_totp_password(self, secret: str, now_millis: Optional[int] = None) -> int:
        """
        获取密钥在当前时间步长的验证码

        Args:
            secret: Base32编码的密钥
            now_millis: UNIX时间（毫秒），为None时使用时钟

        Returns:
            int: 验证码
        """
        key = decode_secret(_require_secret(secret))
        if now_millis is None:
            now_millis = self.clock()
        return totp.calculate_code(key, totp.time_step(now_millis))

    def get_remaining_seconds(self) -> int:
        """当前验证码的剩余有效秒数"""
        return totp.get_remaining_seconds(self.clock())
