"""Streaming content digests for files."""

import hashlib
from enum import Enum

DEFAULT_CHUNK_SIZE = 64 * 1024


class HashAlgorithm(str, Enum):
    """Supported digest algorithms.

    Attributes:
        MD5: 128-bit MD5.
        SHA256: 256-bit SHA-2.
    """

    MD5 = "md5"
    SHA256 = "sha256"


def file_digest(
    path: str,
    algorithm: HashAlgorithm,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Hash the full contents of a file.

    The file is read in chunks so large files are never loaded whole.
    Only the bytes contribute to the digest, never the metadata.

    Args:
        path: Resolved path of the file to hash.
        algorithm: Digest to compute.
        chunk_size: Read size in bytes.

    Returns:
        Lowercase hex digest.

    Raises:
        FileNotFoundError: If the file does not exist.
        PermissionError: If the file cannot be opened.
        OSError: If reading fails part way through.
    """
    digest = hashlib.new(algorithm.value)
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            digest.update(chunk)
    return digest.hexdigest()
