"""User identifier utilities.

User ids are MongoDB ObjectIds assigned by the store on insert. Outside the
db package they travel as 24-character hex strings (for example as the `sub`
claim of a token). This is the only module that converts between the two.
"""

from bson import ObjectId
from bson.errors import InvalidId


def to_object_id(value: str) -> ObjectId:
    """Parse a hex id string.

    Raises:
        ValueError: If value is not a valid ObjectId
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise ValueError(f"Invalid identifier: {value!r}") from e


def to_string(value: ObjectId) -> str:
    """Render an ObjectId as its hex string."""
    return str(value)
