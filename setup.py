from setuptools import setup, find_packages

setup(
    name="capana",
    version="0.1.0",
    description="Advanced packet capture analysis: pcap to column-per-field CSV",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "click>=8.0.0",
        "scapy>=2.5.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "capana=capana_cli.main:cli",
        ],
    },
    # Add this to include non-Python files
    include_package_data=True,
    python_requires=">=3.8",
)
