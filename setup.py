"""
Setup script for recall-planner.

Recall Planner is the scheduling core of a capsule-based study app. It decides:

1. When a capsule is next due for review
2. How well each capsule is mastered, and how the collection is doing overall
3. How to spread the remaining work over the days before an exam

It is a pure computation library: no I/O, persistence or UI.
"""

from setuptools import find_packages, setup

setup(
    name="recall-planner",
    version="1.0.0",
    description="Spaced-repetition scheduling and adaptive study-plan engine",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Recall Planner",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config"],
    python_requires=">=3.11",
    install_requires=[
        # Models & Serialization
        "pydantic>=2.5.0",
        # Config
        "pydantic-settings>=2.1.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning spaced-repetition study-plan scheduling education",
)
