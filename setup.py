from setuptools import setup, find_packages

setup(
    name="scalemind",
    version="0.1.0",
    description="Scalability teaching simulator: load in, latency, errors and bottlenecks out",
    author="scalemind contributors",
    packages=find_packages(include=["scalemind", "scalemind.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
