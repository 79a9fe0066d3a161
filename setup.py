from setuptools import setup, find_packages

setup(
    name="totp-auth",
    version="0.1",
    description="RFC 6238 TOTP server-side authentication compatible with Google Authenticator",
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.7',
    install_requires=[
        'cryptography>=3.4.7',
        'python-dotenv>=0.19.0',
    ],
    extras_require={
        'test': [
            'pytest>=6.2',
            'pyotp>=2.6.0',
        ],
    },
)
