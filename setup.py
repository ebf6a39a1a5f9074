# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- UI ---
    # FletXr ships pre-releases tracking Flet; if pip skips them: pip install FletXr --pre
    "flet>=0.70.0",
    "FletXr",  # Reactive state (fletx.core)

    # --- DATABASE & MODELS ---
    "duckdb>=0.10.0",
    "pydantic>=2.0.0",

    # --- CONFIG & PROMPTS ---
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",
    "jinja2>=3.0.0",

    # --- NETWORK ---
    "httpx>=0.27.0",  # Remote document service and translation provider
]

extras_require = {
    # --- TESTS ---
    "test": [
        "pytest-asyncio==1.3.0",
        "pytest",
    ],
}

setup(
    name="sangam",
    version="1.0.0",
    description="Sangam - local-first study companion client",
    packages=find_packages(include=["sangam", "sangam.*"]),
    include_package_data=True,
    package_data={"sangam.shared.config": ["settings/*.yaml"]},
    install_requires=install_requires,
    extras_require=extras_require,
    python_requires=">=3.11",
)
