from setuptools import setup, find_packages

setup(
    name="srt-fps-stretch",
    version="0.1.0",
    description="Rescale SRT subtitle timestamps between frame rates",
    packages=find_packages(exclude=["test", "test.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.5.0",
        "rich>=13.7.0",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
        "dev": ["ruff>=0.1.0", "pytest>=7.4.0", "black>=23.0.0", "mypy>=1.7.0"],
    },
    entry_points={
        "console_scripts": [
            "srt-stretch=srtstretch.main:cli",
        ],
    },
)
