"""FolderSort - sort files into category folders."""

__version__ = "1.0.0"
