from setuptools import find_packages, setup

setup(
  name="unicurve",
  version="0.1.0",
  description="One API for Ed25519/X25519, secp256k1 and NIST curve signatures, key exchange and sealing",
  long_description=open("README.md").read(),
  long_description_content_type="text/markdown",
  packages=find_packages(include=["unicurve", "unicurve.*"]),
  python_requires=">=3.9",
  classifiers=[
    "Programming Language :: Python :: 3",
    "License :: OSI Approved :: MIT License",
    "Operating System :: OS Independent",
    "Topic :: Security :: Cryptography",
  ],
  install_requires=[
    "colorama>=0.4",
    "cryptography>=35",
    "pynacl>=1.4",
  ],
  extras_require={
    "test": ["pytest", "pytest-sugar", "pytest-mock", "coverage", "mypy", "bandit"],
    "dev": ["tox", "isort", "yapf"],
  },
  entry_points=dict(console_scripts=["unicurve = unicurve.cli.__main__:main"]),
)
