"""Pydantic model for one chat record (one line of the export).

Real record sample:

    {
        "date": "2024-01-01T09:14:03.000Z",
        "sender": "Alice",
        "body": "see you at 10",
        "quote": "",
        "sticker": "",
        "reactions": ["👍"],
        "attachments": []
    }

Decoded lines are not coerced into this model by default; it is the shape
the strict check in :mod:`chatlog.validate` holds records to.
"""

from pydantic import BaseModel, ConfigDict, StrictStr


class ChatMessage(BaseModel):
    """Declared shape of a decoded chat record.

    ``extra="ignore"`` so exports that carry additional keys still pass.
    Strict string types: a number where text is expected is a mismatch,
    not something to coerce.
    """

    model_config = ConfigDict(extra="ignore")

    date: StrictStr
    sender: StrictStr
    body: StrictStr
    quote: StrictStr  # empty when the message is not a reply
    sticker: StrictStr  # empty when the message is not a sticker
    reactions: list[StrictStr]
    attachments: list[StrictStr]
