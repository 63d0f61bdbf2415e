from setuptools import setup, find_packages

setup(
    name="repo-flattener",
    version="0.1.0",
    description="Flatten a GitHub repo into a browsable HTML page and CXML text for LLMs",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    license="0BSD",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "flask>=3.0",
        "markdown>=3.8.2",
        "pygments>=2.19.2",
        "requests>=2.31",
        "mcp>=1.2.0,<2",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "repo-flattener=repo_flattener.cli:main",
            "repo-flattener-web=repo_flattener.app:main",
            "repo-flattener-mcp=repo_flattener.mcp_server:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Utilities",
    ],
)
