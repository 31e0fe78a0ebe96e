from setuptools import find_packages, setup

setup(
    name="aws-tui",
    version="0.1.0",
    description="Terminal UI for browsing and managing AWS resources",
    python_requires=">=3.12",
    packages=find_packages(include=["awstui", "awstui.*"]),
    package_data={"awstui.ui": ["app.tcss"]},
    install_requires=[
        "boto3>=1.34",
        "result>=0.17",
        "rich>=13.7",
        "textual>=0.86",
        "typer>=0.12",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "aws-tui=awstui.cli.app:cli",
        ],
    },
)
