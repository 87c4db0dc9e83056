from setuptools import setup, find_packages

setup(
    name="exlist",
    version="1.0.0",
    packages=find_packages(include=["exlist", "exlist.*"]),
    description="Interactive terminal list of exercises with progress, filters and reset.",
    author="Max Carlson",
    author_email="carlsonamax@gmail.com",
    url="https://github.com/MaxCarlson/exlist",
    python_requires=">=3.11",
    install_requires=[
        "rich>=13",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "exlist=exlist.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
