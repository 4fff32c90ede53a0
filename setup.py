from setuptools import setup

setup(
    name="msgcompose",
    version="0.1.0",
    description="Chat message composer state: sent-message history with drafts, auto-capitalization",
    packages=["msgcompose"],
    python_requires=">=3.9",
    install_requires=[
        "PyQt5>=5.15",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "msgcompose=msgcompose.main:main",
        ],
    },
)
