from setuptools import find_packages, setup


if __name__ == "__main__":
    setup(
        name="countdown",
        version="0.1.0",
        description="Live countdown to the expiry of a temporary code",
        license="MIT",
        python_requires=">=3.10",
        packages=find_packages(include=["libcountdown", "libcountdown.*"]),
        install_requires=["python-dateutil"],
        extras_require={
            "test": ["pytest", "pytest-cov"],
            "lint": ["flake8", "isort"],
        },
        entry_points={
            "console_scripts": [
                "countdown = libcountdown.scripts.main:main",
            ],
        },
    )
