from typing import List, Optional

from .config import BYTES_PER_SCRATCH_CODE, SCRATCH_CODE_MODULE

# 少于8位有效数字的备用码视为无效
SCRATCH_CODE_MIN = SCRATCH_CODE_MODULE // 10


class AuthenticatorKey:
    """
    新生成的密钥

    生成后立即交给调用方，认证器本身不保存。
    """

    def __init__(self, key: str, verification_code: int,
                 scratch_codes: Optional[List[int]] = None):
        self.key = key
        self.verification_code = verification_code
        self.scratch_codes = list(scratch_codes or [])

    def __eq__(self, other):
        if not isinstance(other, AuthenticatorKey):
            return NotImplemented
        return (self.key == other.key
                and self.verification_code == other.verification_code
                and self.scratch_codes == other.scratch_codes)

    def __repr__(self):
        # 不输出密钥和验证码
        return f"AuthenticatorKey(scratch_codes={len(self.scratch_codes)})"


def calculate_scratch_code(chunk: bytes) -> Optional[int]:
    """
    由4个随机字节计算备用码

    Returns:
        Optional[int]: 8位备用码，有效数字不足8位时返回None
    """
    if len(chunk) != BYTES_PER_SCRATCH_CODE:
        raise ValueError(f"备用码需要 {BYTES_PER_SCRATCH_CODE} 个字节")
    code = (int.from_bytes(chunk, 'big') & 0x7FFFFFFF) % SCRATCH_CODE_MODULE
    if code < SCRATCH_CODE_MIN:
        return None
    return code


def generate_scratch_codes(buffer: bytes, count: int, random_source) -> List[int]:
    """
    从随机缓冲区计算备用码

    Args:
        buffer: 密钥之后的随机字节
        count: 备用码数量
        random_source: 备用码无效时补充随机字节

    Returns:
        List[int]: 备用码列表
    """
    if len(buffer) < count * BYTES_PER_SCRATCH_CODE:
        raise ValueError("随机缓冲区长度不足")
    codes = []
    for i in range(count):
        start = i * BYTES_PER_SCRATCH_CODE
        code = calculate_scratch_code(buffer[start:start + BYTES_PER_SCRATCH_CODE])
        while code is None:
            code = calculate_scratch_code(random_source.fill(BYTES_PER_SCRATCH_CODE))
        codes.append(code)
    return codes
