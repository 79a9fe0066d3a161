"""配置测试"""

import os

import pytest

from totp_auth import AuthenticatorConfig, AuthenticatorError, ErrorKind, TOTPAuth
from totp_auth.config import DEFAULT_WINDOW_SIZE, SCRATCH_CODES, validate_window

# 测试涉及的环境变量
TEST_ENV_VARS = ['TOTP_WINDOW_SIZE', 'TOTP_SCRATCH_CODES']


@pytest.fixture
def clean_env():
    """清理测试环境变量，load_dotenv 会直接写入 os.environ"""
    saved = {key: os.environ.pop(key, None) for key in TEST_ENV_VARS}
    yield
    for key, value in saved.items():
        os.environ.pop(key, None)
        if value is not None:
            os.environ[key] = value


@pytest.fixture
def missing_dotenv(tmp_path):
    return str(tmp_path / 'missing.env')


def test_defaults(clean_env, missing_dotenv):
    config = AuthenticatorConfig.from_env(missing_dotenv)
    assert config.window_size == DEFAULT_WINDOW_SIZE
    assert config.scratch_codes == SCRATCH_CODES


def test_from_environment(clean_env, missing_dotenv):
    os.environ['TOTP_WINDOW_SIZE'] = '5'
    os.environ['TOTP_SCRATCH_CODES'] = '0'
    config = AuthenticatorConfig.from_env(missing_dotenv)
    assert config.window_size == 5
    assert config.scratch_codes == 0


def test_from_dotenv_file(clean_env, tmp_path):
    """测试从 .env 文件读取"""
    dotenv_file = tmp_path / '.env'
    dotenv_file.write_text('TOTP_WINDOW_SIZE=7\nTOTP_SCRATCH_CODES=2\n')
    config = AuthenticatorConfig.from_env(str(dotenv_file))
    assert config.window_size == 7
    assert config.scratch_codes == 2


def test_environment_overrides_dotenv(clean_env, tmp_path):
    dotenv_file = tmp_path / '.env'
    dotenv_file.write_text('TOTP_WINDOW_SIZE=7\n')
    os.environ['TOTP_WINDOW_SIZE'] = '9'
    assert AuthenticatorConfig.from_env(str(dotenv_file)).window_size == 9


@pytest.mark.parametrize('value', ['abc', '3.5', '0', '18'])
def test_invalid_window_from_environment(clean_env, missing_dotenv, value):
    os.environ['TOTP_WINDOW_SIZE'] = value
    with pytest.raises(AuthenticatorError) as excinfo:
        AuthenticatorConfig.from_env(missing_dotenv)
    assert excinfo.value.kind == ErrorKind.INVALID_ARGUMENT


def test_negative_scratch_codes():
    with pytest.raises(AuthenticatorError):
        AuthenticatorConfig(scratch_codes=-1)


def test_authenticator_reads_environment(clean_env):
    os.environ['TOTP_WINDOW_SIZE'] = '11'
    assert TOTPAuth().get_window_size() == 11


@pytest.mark.parametrize('window', [1, 2, 3, 16, 17])
def test_validate_window_accepts(window):
    assert validate_window(window) == window


@pytest.mark.parametrize('window', [0, 18, -1, True, 3.0, '3', None])
def test_validate_window_rejects(window):
    with pytest.raises(AuthenticatorError) as excinfo:
        validate_window(window)
    assert excinfo.value.kind == ErrorKind.INVALID_ARGUMENT


def test_dotenv_found_in_working_directory(clean_env, tmp_path, monkeypatch):
    """测试从应用的工作目录读取 .env 文件"""
    (tmp_path / '.env').write_text('TOTP_WINDOW_SIZE=7\n')
    monkeypatch.chdir(tmp_path)
    assert AuthenticatorConfig.from_env().window_size == 7
    assert TOTPAuth().get_window_size() == 7
