"""Install the captcha image service."""

from setuptools import setup, find_packages

setup(
    name='captchas',
    version='0.1.0',
    packages=find_packages(exclude=['*tests*']),
    install_requires=[
        "flask>=2.2",
        "werkzeug>=2.2",
        "captcha>=0.5",
        "redis>=4.1",
        "fakeredis",
        "python-json-logger>=2.0.2",
    ],
    extras_require={
        "test": [
            "pytest",
            "pillow",
        ]
    },
    zip_safe=False
)
