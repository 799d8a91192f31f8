#!/usr/bin/env python3
"""
File utility functions.
"""
import hashlib
import os


class FileUtils:
    """File utility functions as static methods."""

    CHUNK_SIZE = 1024 * 1024

    @staticmethod
    def normalize_path(p: str) -> str:
        """Normalize a user-supplied path."""
        return os.path.normpath(os.path.expanduser(p))

    @staticmethod
    def fingerprint_file(path: str) -> str:
        """
        Stable cache key for a document: MD5 over the file's bytes.

        Args:
          path: Path to the document.

        Returns:
          Hexadecimal MD5 digest.
        """
        md5_hash = hashlib.md5()
        with open(path, "rb") as f:
            for block in iter(lambda: f.read(FileUtils.CHUNK_SIZE), b""):
                md5_hash.update(block)
        return md5_hash.hexdigest()


normalize_path = FileUtils.normalize_path
fingerprint_file = FileUtils.fingerprint_file
