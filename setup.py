from setuptools import setup, find_packages

setup(
    name="rpg-ui-state",
    version="0.1.0",
    packages=find_packages(exclude=["rpg_ui.tests", "rpg_ui.tests.*"]),
    include_package_data=True,
    package_data={
        "rpg_ui": ["configs/*.yml"],
    },
    python_requires=">=3.10",
    install_requires=[
        "pyyaml>=6.0",
        "python-dotenv>=1.0.0",
        "jsonschema>=4.17.3",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "rpg-ui-state=rpg_ui.core.main:main",
        ],
    },
)
