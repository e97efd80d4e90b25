# setup.py
from setuptools import setup, find_packages

setup(
    name="link_audit",
    version="0.1.0",
    description="Асинхронный аудит ссылок LinkAudit: статус, заголовок и соответствие текста ссылки",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "link-audit=link_audit.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
