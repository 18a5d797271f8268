from setuptools import setup, find_packages

with open("README.md", "w") as f:
    f.write("""# ECP Remote

A Python remote control for media players that speak the ECP (External Control Protocol) over HTTP.

## Features

- Automatic discovery of ECP devices on the network over SSDP
- Named key presses (navigation, playback, volume, power)
- Text entry, one literal keypress per character
- Installed app listing and app launch

## Installation

```bash
pip install .
```

## Usage

```python
from ecp_remote import discover, fetch_apps, send_command, send_text, launch_app

devices = discover()
apps = fetch_apps(devices[0])
send_command(devices[0], "Home")
send_text(devices[0], "hi there")
launch_app(devices[0], apps[0].id)
```

## Requirements

- Python 3.8+
- requests
- upnpclient
""")

setup(
    name="ecp_remote",
    version="0.1.0",
    description="Discovery and remote control for ECP media players",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="ECP Remote Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "upnpclient>=1.0.3",
        "requests>=2.31.0",
    ],
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Multimedia :: Video",
        "Topic :: Home Automation",
    ],
)
