# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="hexcodec",
    version="0.1.0",
    packages=find_namespace_packages(include=["hexcodec", "hexcodec.*"]),
    install_requires=[
        "psutil",             # benchmark memory sampling
        "prometheus_client",  # benchmark metrics
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["hexcodec=hexcodec.cli:main"],
    },
)
