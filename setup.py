"""Setup script for fbcommerce module."""
import os
import re

from setuptools import find_packages, setup

def read_init(field: str) -> str:
    """Read a field from the __init__.py file."""
    init_file = os.path.join("fbcommerce", "__init__.py")
    pattern = rf'^__{field}__\s*=\s*[\'"]([^\'"]+)[\'"]'

    with open(init_file, "r", encoding="utf-8") as f:
        for line in f:
            match = re.match(pattern, line)
            if match:
                return match.group(1)

    raise RuntimeError(f"Unable to find __{field}__ in {init_file}.")


setup(
    name="fbcommerce",
    version=read_init("version"),
    description="Graph API client for commerce catalog sync, product batch "
                "upserts and server-side pixel events.",
    long_description=open("README_PYPI.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    author=read_init("author"),
    author_email=read_init("author_email"),
    url="https://github.com/sh0rch/fbcommerce",
    packages=find_packages(include=["fbcommerce", "fbcommerce.*"]),
    include_package_data=True,
    license="MIT",
    keywords="facebook graph api catalog commerce pixel conversions events",
    install_requires=[
        "httpx",
        "python-dotenv",
        "colorlog",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ]
    },
    entry_points={
        "console_scripts": [
            "fbcommerce=fbcommerce.__main__:run"
        ]
    },
    python_requires='>=3.10',
)
