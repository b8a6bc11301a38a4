from setuptools import setup, find_packages

setup(
    name="winenvedit",
    version="0.1.0",
    description="Change-tracking editor for Windows environment variables",
    packages=find_packages(include=["winenvedit", "winenvedit.*"]),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0",
        "pydantic>=2.0",
        "tomli>=2.0",
        "tomli-w>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "winenvedit=winenvedit.cli:cli",
        ],
    },
)
