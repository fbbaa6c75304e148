from setuptools import setup, find_packages

setup(
    name="snp-dists",
    version="0.6.3",
    packages=find_packages(where = "src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pyyaml",
    ],
    extras_require={
        "test": ["pytest"],
    },
entry_points={
            "console_scripts": [
                "snp-dists=snp_dists.cli:main",
            ],
    },
    description="Pairwise SNP distance matrix from a FASTA alignment",
)
