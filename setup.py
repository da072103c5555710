from setuptools import setup, find_packages

setup(
    name="workout_tracker",
    version="1.0.0",
    packages=find_packages(include=["workout_tracker", "workout_tracker.*"]),
    install_requires=[
        "pandas>=2.0.0",
        "numpy>=1.24.0",
        "plotly>=5.24.0",
        "dash>=2.18.0",
        "dash-bootstrap-components>=1.4.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "workout-tracker=workout_tracker.cli:main",
        ],
    },
    python_requires=">=3.8",
)
