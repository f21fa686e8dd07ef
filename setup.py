from setuptools import setup, find_packages

# pyproject.toml is the source of truth
# This setup.py is for backwards compatibility
setup(
    packages=find_packages(where="src", include=["leakguard", "leakguard.*"]),
    package_dir={"": "src"},
    entry_points={"console_scripts": ["leakguard=leakguard.cli.main:cli"]},
)
