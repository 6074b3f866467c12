# setup.py
from setuptools import setup, find_packages

setup(
    name="domain_crawler",
    version="0.1.0",
    description="Concurrent same-domain web crawler DomainCrawler",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"domain_crawler.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "lxml>=4.9",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "Jinja2>=3.1",
        "redis>=5.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["domain-crawler=domain_crawler.cli:cli"],
    },
    python_requires=">=3.11",
)
