"""认证器错误类型"""

from enum import Enum


class ErrorKind(Enum):
    """错误类别"""

    # 调用方传入的参数不合法，可以直接修正后重试
    INVALID_ARGUMENT = 'invalid_argument'
    # 底层密码学原语失败，详细信息只写入日志
    CRYPTO_UNAVAILABLE = 'crypto_unavailable'


# 对外统一的错误信息，不暴露底层密码库的细节
OPERATION_UNAVAILABLE = "操作暂时无法完成"


class AuthenticatorError(Exception):
    """认证器异常，调用方通过 kind 区分错误类别"""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @classmethod
    def invalid_argument(cls, message: str) -> 'AuthenticatorError':
        return cls(ErrorKind.INVALID_ARGUMENT, message)

    @classmethod
    def crypto_unavailable(cls) -> 'AuthenticatorError':
        return cls(ErrorKind.CRYPTO_UNAVAILABLE, OPERATION_UNAVAILABLE)

    def __repr__(self):
        return f"AuthenticatorError({self.kind.name}, {self.message!r})"
