from setuptools import setup, find_packages

setup(
    name="tldrhooks",
    version="0.1.0",
    description="Hook-side client that queries the tldr code-analysis daemon with a cold CLI fallback",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"tldrhooks": ["assets/settings.json", "assets/skill/*.md"]},
    install_requires=[
        "typer>=0.9.0",
        "rich>=13.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "tldrhooks=tldrhooks.main:tldrhooks",
        ],
    },
    python_requires=">=3.10",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
)
