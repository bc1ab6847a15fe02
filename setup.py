from setuptools import setup, find_packages

setup(
    name="pkgfzf",
    version="0.1.0",
    description="pkgfzf: fuzzy-search and install apt, flatpak, snap, cargo and npm packages",
    packages=find_packages(exclude=["tests", "tests.*"]),  # pkgfzf + subpackages
    python_requires=">=3.9",
    install_requires=["rich", "psutil", "requests"],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "pkgfzf=pkgfzf.cli:main",
            "pkgfzf-list=pkgfzf.lister:main",
            "pkgfzf-install=pkgfzf.installer:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX :: Linux",
    ],
)
