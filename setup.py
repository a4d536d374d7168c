from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="gpt-cli-tool",
    version="0.1",
    author="Herwig Grimm",
    author_email="herwig.grimm@gmail.com",
    description="Translate pseudo commands into executable shell commands using the OpenAI API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/hgrimm/gpt-cli-tool",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Environment :: Console",
        "Topic :: Utilities",
    ],
    python_requires=">=3.8",
    install_requires=[
        "psutil>=5.9.0",
        "python-dotenv>=1.0.0",
        "requests>=2.28.0",
        "rich>=12.0.0",
        "toml>=0.10.2",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "gpt-cli-tool=gptcli.main:main",
        ],
    },
)
