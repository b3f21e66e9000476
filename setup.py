from setuptools import find_namespace_packages, setup

setup(
    name="polykernel",
    version="0.3.0",
    description="Integer-space 2D polygon kernel with bisector offsetting and decimation",
    packages=find_namespace_packages(include=["polykernel", "polykernel.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
