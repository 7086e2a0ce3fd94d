from pathlib import Path
from setuptools import setup, find_packages

PROJECT_ROOT = Path(__file__).parent.resolve()
TEMPLATES_DIR = PROJECT_ROOT / "wfgen" / "render" / "templates"

template_files = []
if TEMPLATES_DIR.exists():
    for path in sorted(TEMPLATES_DIR.iterdir()):
        if path.is_file() and path.suffix == ".tmpl":
            template_files.append(str(path.relative_to(PROJECT_ROOT / "wfgen")))

setup(
    name="wfgen",
    version="0.3.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"wfgen": template_files},
    python_requires=">=3.9",
    install_requires=[
        "cli-core-yo<2",
        "pydantic>=2",
        "PyYAML>=6",
        "rich",
        "typer",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "wfgen=wfgen.cli:main",
        ],
    },
)
