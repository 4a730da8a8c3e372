from setuptools import setup, find_packages

setup(
    name="healthapproved",
    version="0.1.0",
    packages=find_packages(include=["healthapproved", "healthapproved.*"]),
    package_data={"healthapproved": ["data/*.json"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "httpx",
        "python-dotenv",
        "pydantic",
        "pydantic-settings",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
