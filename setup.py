"""
Setup script for the virtual RFID tag emulator
"""

from setuptools import setup
import os

# Read the README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "Virtual RFID tag emulator with LLRP report batching"

setup(
    name="tagemu",
    version="1.0.0",
    description="Virtual RFID tag emulator with LLRP report batching",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=["tagemu"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Communications",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.8",
    install_requires=[
        "pyserial>=3.5",
        "flask>=2.0",
        "flask-socketio>=5.3",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "black>=21.0",
            "flake8>=3.8",
            "mypy>=0.800",
        ],
    },
    entry_points={
        "console_scripts": [
            "tagemu=tagemu.run:main",
        ],
    },
    keywords="rfid llrp epc tag emulator",
)
