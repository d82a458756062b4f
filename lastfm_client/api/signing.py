"""
Request signature for the Last.fm API.
"""

import hashlib
from typing import Mapping

# Keys appended after signing; they never take part in the signature.
RESERVED_KEYS = frozenset({"api_sig", "format"})


def sign(params: Mapping[str, str], shared_secret: str) -> str:
    """
    Computes the ``api_sig`` value for a parameter set.

    Keys are sorted byte-wise, each key is concatenated with its value, the shared
    secret is appended, and the MD5 digest of the result is returned as lowercase hex.

    Args:
        params: The parameters to sign, excluding ``api_sig`` and ``format``.
        shared_secret: The application's shared secret.

    Returns:
        The 32-character hexadecimal signature.
    """
    sig_str = "".join(
        key + params[key] for key in sorted(params, key=lambda k: k.encode("utf-8"))
    )
    sig_str += shared_secret
    return hashlib.md5(sig_str.encode("utf-8")).hexdigest()  # noqa: S324
