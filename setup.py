#!/usr/bin/env python3
"""Setup script."""

import os

from setuptools import setup


def open_file(fname):
    """Open and return a file-like object for the relative filename."""
    return open(os.path.join(os.path.dirname(__file__), fname))


setup(
    name="azul-plugin-eaccache",
    description="Decrypt, hash and pattern scan EasyAntiCheat cache images.",
    author="Azul",
    author_email="azul@asd.gov.au",
    url="https://www.asd.gov.au/",
    packages=["azul_plugin_eaccache", "azul_plugin_eaccache.eac_cache"],
    package_data={
        "azul_plugin_eaccache": ["plugin_config.json"],
        "azul_plugin_eaccache.eac_cache": ["config.json"],
    },
    include_package_data=True,
    python_requires=">=3.12",
    classifiers=[],
    entry_points={
        "console_scripts": [
            "azul-plugin-eaccache = azul_plugin_eaccache.cache:main",
            "azul-plugin-eaccache-search = azul_plugin_eaccache.search:main",
        ]
    },
    use_scm_version={"fallback_version": "0.0.0"},
    setup_requires=["setuptools_scm"],
    install_requires=[r.strip() for r in open_file("requirements.txt") if r.strip() and not r.startswith("#")],
    extras_require={"test": [r.strip() for r in open_file("requirements_test.txt") if r.strip() and not r.startswith("#")]},
)
