"""Defines `MD5AssignmentPolicy`, which assigns the MD5 hash of a value."""

import logging
from typing import Any

from cryptography.hazmat.primitives import hashes

from assignables.assignable import Assignable
from assignables.policy.assignment_policy import AssignmentPolicy

logger = logging.getLogger(__name__)


class MD5AssignmentPolicy(AssignmentPolicy):
    """
    Sets the hex-encoded MD5 digest of `str(value)` instead of the value.

    The digest is computed over the UTF-8 encoding of the text, so the same
    text always yields the same 32-character lowercase string.
    """

    def assign(self, value: Any, variable: Assignable) -> None:
        digest = self.hash(value)
        logger.debug("Setting hash [%s] into variable [%s].", digest, variable)
        variable.set(digest)

    @staticmethod
    def hash(value: Any) -> str:
        """Returns the hex MD5 digest of the textual form of |value|."""
        logger.debug("Calculating MD5 hash.")
        md5 = hashes.Hash(hashes.MD5())
        md5.update(str(value).encode("utf-8"))
        return md5.finalize().hex()
