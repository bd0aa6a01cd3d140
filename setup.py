"""
macOS app bundle build script.

Usage:
    python setup.py py2app

Regular installs (``pip install .``) are driven by pyproject.toml; the py2app
options below only apply when building the bundle.
"""

import sys
import tomllib
from pathlib import Path

from setuptools import setup


def get_project_version(default: str = "0.0.0") -> str:
    pyproject = Path(__file__).resolve().parent / "pyproject.toml"
    if not pyproject.exists():
        return default
    try:
        with pyproject.open("rb") as fp:
            data = tomllib.load(fp)
        return data["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return default


# --- Application Configuration (Single Source of Truth) ---
APP_NAME = "FolderSort"
APP_SCRIPT = "src/foldersort_app/main.py"
APP_VERSION = get_project_version()
BUNDLE_ID = "org.foldersort.app"

# --- Info.plist Configuration ---
PLIST = {
    "CFBundleName": APP_NAME,
    "CFBundleDisplayName": APP_NAME,
    "CFBundleVersion": APP_VERSION,
    "CFBundleShortVersionString": APP_VERSION,
    "CFBundleIdentifier": BUNDLE_ID,
    "LSMinimumSystemVersion": "11.0",
    "LSRequiresNativeExecution": True,
    "LSApplicationCategoryType": "public.app-category.utilities",
}

# --- py2app Options ---
OPTIONS = {
    "packages": ["PySide6", "foldersort_app"],
    "plist": PLIST,
    "bdist_base": "build/temp",
    "dist_dir": "build/dist",
    "strip": True,
    "argv_emulation": False,
    "includes": [
        "shiboken6",
        "PySide6.QtCore",
        "PySide6.QtGui",
        "PySide6.QtWidgets",
    ],
    "excludes": [
        "tkinter",
        "PyInstaller",
        "numpy",
        "pandas",
        "IPython",
        "PIL",
        "test",
        "unittest",
        "pytest",
        "pytestqt",
        "PySide6.QtWebEngine",
        "PySide6.QtWebEngineCore",
        "PySide6.QtWebEngineWidgets",
        "PySide6.QtMultimedia",
        "PySide6.QtMultimediaWidgets",
        "PySide6.QtQuick",
        "PySide6.QtQml",
        "PySide6.QtPdf",
        "PySide6.QtSql",
        "PySide6.QtTest",
    ],
}

# --- Setup Definition ---
if "py2app" in sys.argv:
    setup(
        app=[APP_SCRIPT],
        name=APP_NAME,
        version=APP_VERSION,
        options={"py2app": OPTIONS},
        setup_requires=["py2app"],
    )
else:
    setup()
