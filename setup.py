from setuptools import setup, find_namespace_packages

setup(
    name="book_friends",
    version="0.1.0",
    packages=find_namespace_packages(include=['api*', 'cli*', 'core*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "requests",
        "fastapi",
        "pydantic>=2",
        "Werkzeug",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "bookfriends=cli.main:main",
        ],
    },
)
