"""Setup script for Dynamic Ports"""

from setuptools import setup, find_packages

setup(
    name="dynamic-ports",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "PyYAML>=5.4",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
    author="Dynamic Ports Team",
    description="Dynamic application and admin port assignment for service startup",
    entry_points={
        "console_scripts": [
            "dynamic-ports=dynamic_ports.main:main",
        ],
    },
)
