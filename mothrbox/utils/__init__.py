"""Utility functions for Mothrbox.

Import convention: use module-level imports for clarity.

    from mothrbox.utils import isodatetime, uid
    timestamp = isodatetime.to_timestamp(isodatetime.utcnow())
    oid = uid.to_object_id(user_id)
"""

from . import isodatetime, uid

__all__ = ["isodatetime", "uid"]
