from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="reelfolio",
    version="0.1.0",
    author="Reelfolio developers",
    description="A Flask portfolio site for filmmakers with a password-gated project admin",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["reelfolio", "reelfolio.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: Flask",
    ],
    python_requires=">=3.9",
    install_requires=[
        "Flask>=3.0.0",
        "Flask-CORS>=4.0.0",
        "python-dotenv>=1.0.0",
        "pymongo>=4.6",
        "boto3>=1.34.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "mongomock>=4.1",
            "black>=22.0",
            "flake8>=5.0",
        ],
    },
    include_package_data=True,
    package_data={
        "reelfolio": [
            "modules/*/templates/**/*.html",
            "modules/*/static/**/*.css",
            "modules/*/static/**/*.js",
        ],
    },
    zip_safe=False,
)
